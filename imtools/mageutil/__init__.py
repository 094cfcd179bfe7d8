"""Starting, stopping and checking prebuilt service binaries."""