"""
ProxyResult — every outcome of one call to the booking backend.

    ProxyOk           backend answered {"ok": true, ...}
    ConfigError       URL or secret missing, nothing was sent
    TransportError    timeout or network failure
    ParseError        the body was not JSON
    ApplicationError  backend answered but said no (ok:false, _status, conflict)

Callers either match on the class or just look at `.ok`; `.http_status`,
`.error` and `.details` exist on all of them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union


@dataclass(frozen=True)
class ProxyOk:
    data: dict = field(default_factory=dict)
    http_status: int = 200

    ok = True
    error = None
    details = None
    conflict = False


@dataclass(frozen=True)
class ConfigError:
    message: str

    ok = False
    http_status = 500
    details = None
    conflict = False

    @property
    def error(self) -> str:
        return self.message


@dataclass(frozen=True)
class TransportError:
    kind: Literal["timeout", "network"]
    message: str

    ok = False
    http_status = 500
    details = None
    conflict = False

    @property
    def error(self) -> str:
        return self.message


@dataclass(frozen=True)
class ParseError:
    raw: str
    http_status: int = 500
    message: str = "Risposta non valida dal Google Script (non JSON)."

    ok = False
    conflict = False

    @property
    def error(self) -> str:
        return self.message

    @property
    def details(self) -> str:
        return self.raw


@dataclass(frozen=True)
class ApplicationError:
    http_status: int
    message: str
    conflict: bool = False
    details: Any = None

    ok = False

    @property
    def error(self) -> str:
        return self.message


ProxyResult = Union[ProxyOk, ConfigError, TransportError, ParseError, ApplicationError]
