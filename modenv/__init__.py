from modenv.core.errors import (
    FactoryAlreadyRegistered,
    IllegalTransition,
    InvalidFactory,
    MissingRegistrationError,
    ModuleAlreadyDefined,
    ModuleEnvError,
    ModuleNotFoundError,
)
from modenv.core.modules import (
    Environment,
    ModuleContext,
    ModuleRecord,
    ModuleState,
    get_environment,
    install,
    reset_environment,
    uninstall,
)

__version__ = "0.1.0"

__all__ = [
    "Environment",
    "FactoryAlreadyRegistered",
    "IllegalTransition",
    "InvalidFactory",
    "MissingRegistrationError",
    "ModuleAlreadyDefined",
    "ModuleContext",
    "ModuleEnvError",
    "ModuleNotFoundError",
    "ModuleRecord",
    "ModuleState",
    "get_environment",
    "install",
    "reset_environment",
    "uninstall",
]
