from __future__ import annotations

from typing import Optional, Sequence


class ModuleEnvError(Exception):
    """Base class for every error raised by the module environment."""


class ModuleAlreadyDefined(ModuleEnvError, ValueError):
    def __init__(
        self,
        package: str,
        *,
        module: Optional[str] = None,
        path: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.package = package
        self.module = module
        self.path = path
        if message is None:
            target = f"{package}:{module}" if module is not None else f"{package}::{path}"
            message = f"Cannot overwrite existing module {target}"
        super().__init__(message)


class FactoryAlreadyRegistered(ModuleAlreadyDefined):
    def __init__(self, record_id: str, package: str, *, module: Optional[str] = None, path: Optional[str] = None):
        super().__init__(
            package,
            module=module,
            path=path,
            message=f"Module {record_id} already has a registration function",
        )


class ModuleNotFoundError(ModuleEnvError, LookupError):
    """
    Resolution exhausted every candidate.

    `attempted` keeps the candidates in the order they were tried, since the
    search order is what usually explains a miss.
    """

    def __init__(self, identifier: str, attempted: Sequence[object], *, package: Optional[str] = None):
        self.identifier = identifier
        self.package = package
        self.attempted = tuple(attempted)
        tried = ", ".join(str(c) for c in self.attempted)
        super().__init__(f"Invalid module specified: {identifier} (tried: {tried})")


class MissingRegistrationError(ModuleEnvError):
    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"No registration function found for module {record_id}")


class InvalidFactory(ModuleEnvError, TypeError):
    def __init__(self, factory: object):
        self.factory = factory
        super().__init__(f"Invalid registration function: {type(factory).__name__} is not callable")


class IllegalTransition(ModuleEnvError, ValueError):
    def __init__(self, src: object, dst: object):
        self.src = src
        self.dst = dst
        super().__init__(f"Illegal transition: {getattr(src, 'value', src)} -> {getattr(dst, 'value', dst)}")
