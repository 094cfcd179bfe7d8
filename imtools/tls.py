"""Client-side TLS configuration."""

from __future__ import annotations

import re
import ssl
from dataclasses import dataclass

__all__ = ["TLSConfigError", "FailedToLoadCACertError", "ClientConfig"]

_CERT_BLOCK_RE = re.compile(
    r"-----BEGIN CERTIFICATE-----.*?-----END CERTIFICATE-----", re.DOTALL
)


class TLSConfigError(Exception):
    """Raised when a TLS client configuration cannot be built."""


class FailedToLoadCACertError(TLSConfigError):
    """Raised when the CA file holds no usable certificate."""

    def __init__(self, message: str = "failed to load CACertificate") -> None:
        super().__init__(message)


class _ClientContext(ssl.SSLContext):
    """An SSL context that supplies its configured server name when wrapping."""

    server_name: str = ""

    def wrap_socket(self, sock, server_side=False, do_handshake_on_connect=True,
                    suppress_ragged_eofs=True, server_hostname=None, session=None):
        return super().wrap_socket(
            sock,
            server_side=server_side,
            do_handshake_on_connect=do_handshake_on_connect,
            suppress_ragged_eofs=suppress_ragged_eofs,
            server_hostname=server_hostname or self.server_name or None,
            session=session,
        )

    def wrap_bio(self, incoming, outgoing, server_side=False, server_hostname=None, session=None):
        return super().wrap_bio(
            incoming,
            outgoing,
            server_side=server_side,
            server_hostname=server_hostname or self.server_name or None,
            session=session,
        )


def _append_certs_from_pem(context: ssl.SSLContext, pem: str) -> bool:
    loaded = False
    for block in _CERT_BLOCK_RE.findall(pem):
        try:
            context.load_verify_locations(cadata=block)
        except (ssl.SSLError, ValueError):
            continue
        loaded = True
    return loaded


@dataclass
class ClientConfig:
    """Settings for connecting to a TLS server as a client."""

    insecure: bool = False
    server_name: str = ""
    ca_cert_file: str = ""
    client_cert_file: str = ""
    client_key_file: str = ""

    def client_tls_config(self) -> ssl.SSLContext:
        """Build an SSL context requiring TLS 1.2 or newer."""
        context = _ClientContext(ssl.PROTOCOL_TLS_CLIENT)
        context.minimum_version = ssl.TLSVersion.TLSv1_2

        if self.client_cert_file:
            if not self.client_key_file:
                raise TLSConfigError("could not load client key pair: no key file given")
            try:
                context.load_cert_chain(self.client_cert_file, self.client_key_file)
            except (OSError, ssl.SSLError, ValueError) as exc:
                raise TLSConfigError(f"could not load client key pair: {exc}") from exc

        if self.insecure:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        if self.server_name:
            context.server_name = self.server_name

        if self.ca_cert_file:
            try:
                with open(self.ca_cert_file, encoding="utf-8", errors="replace") as handle:
                    pem = handle.read()
            except OSError as exc:
                raise TLSConfigError(f"could not read ca certificate: {exc}") from exc
            if not _append_certs_from_pem(context, pem):
                raise FailedToLoadCACertError()
        else:
            context.load_default_certs()

        return context