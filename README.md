# imtools

A collection of small, dependable helpers for building and running
instant-messaging services, plus library code for starting, stopping and
checking a set of already-built service binaries.

## Installation

```
pip install imtools
```

For running the test suite:

```
pip install "imtools[test]"
pytest
```

## Library overview

| Module | What it offers |
| --- | --- |
| `imtools.stringutil` | string/number conversion, membership and de-duplication, set-like intersection and difference, CRC32 hashing, padding/truncation, case helpers, e-mail validation |
| `imtools.datautil` | generic list and dict helpers: difference, intersection, distinct, delete, index, pagination, ordering, sorting, conversion to maps and sets |
| `imtools.encrypt` | MD5 hex digests with optional salt, AES-CBC with PKCS#7 padding |
| `imtools.encoding` | Base64 encoding and decoding |
| `imtools.jsonutil` | compact JSON marshalling and unmarshalling |
| `imtools.formatutil` | console progress bars |
| `imtools.splitter` | splitting a list of strings into fixed-size chunks |
| `imtools.timeutil` | timestamps in seconds, milliseconds and nanoseconds, day boundaries, timezone-aware cycle checks |
| `imtools.idutil` | message IDs and operation IDs |
| `imtools.runtimeenv` | detection of Kubernetes, Docker or plain source deployments |
| `imtools.network` | local IP discovery, listen/register IP defaults, client IP from request headers |
| `imtools.httputil` | a small JSON-oriented HTTP client |
| `imtools.tls` | building client TLS contexts from certificate files |
| `imtools.version` | build and version information |

### Examples

```python
from imtools import datautil, encrypt, encoding, stringutil
from imtools.splitter import Splitter

datautil.distinct([1, 1, 4, 4, 5, 2, 3])          # [1, 4, 5, 2, 3]
datautil.paginate(list(range(10)), 2, 3)           # [3, 4, 5]
datautil.slice_sub([1, 2, 3, 4], [2, 4])           # [1, 3]

encrypt.md5("test")                                # '098f6bcd4621d373cade4e832627b4f6'
key = b"placeholder".ljust(16)                     # AES keys are 16, 24 or 32 bytes
ciphertext = encrypt.aes_encrypt(b"Hello, World!", key)
encrypt.aes_decrypt(ciphertext, key)               # b'Hello, World!'

encoding.base64_decode(encoding.base64_encode("hi"))  # 'hi'

stringutil.format_string("hello", 10, True)        # 'hello     '

[r.item for r in Splitter(2, ["a", "b", "c"]).get_split_result()]
# [['a', 'b'], ['c']]
```

Errors are raised as exceptions, for example `encoding.DecodeError` for
malformed Base64 or `timeutil.TimezoneError` for an unknown timezone name.

## Managing service processes

The `imtools.mageutil` package works with a project whose service binaries
sit in `_output/bin/platforms/<os>/<arch>/` and whose tool binaries sit in
`_output/bin/tools/<os>/<arch>/`. A `start-config.yml` lists which services
to run and how many instances of each:

```yaml
serviceBinaries:
  openim-api: 1
  openim-rpc-user: 2
toolBinaries:
  - check-component
maxFileDescriptors: 10000
```

| Module | What it offers |
| --- | --- |
| `imtools.mageutil.config` | `load_start_config()` reads the file into a `StartConfig`; on Windows service names gain `.exe`; problems raise `ConfigError` |
| `imtools.mageutil.paths` | `build_output_paths()` lays out the `_output` tree as an `OutputPaths`; `os_arch()` and `detect_platform()` name the current platform |
| `imtools.mageutil.process` | finding processes by executable path, checking instance counts, printing listening ports, terminating processes |
| `imtools.mageutil.services` | `ServiceManager`, which starts tools and services and checks or stops them |
| `imtools.mageutil.console` | coloured, timestamped console messages |

```python
from imtools.mageutil.config import load_start_config
from imtools.mageutil.paths import build_output_paths
from imtools.mageutil.services import ServiceManager, ServiceError

paths = build_output_paths()          # rooted at the working directory
paths.create_dirs()
manager = ServiceManager(load_start_config("start-config.yml"), paths)

manager.start_tools()                 # each tool runs to completion with "-c <config dir>"
manager.kill_exist_binaries()
manager.check_binaries_stop()
manager.start_binaries()              # instance i runs with "-i i -c <config dir>"
try:
    manager.check_binaries_running()
except ServiceError as exc:
    print(exc)
manager.print_listened_ports_by_binaries()
```

### What is not included

The package has no command-line program: the steps above are driven from
Python code. It does not compile the service or tool binaries, write
`start-config.yml`, raise the open-file limit, or generate protocol code;
the binaries and the configuration file must already be in place.