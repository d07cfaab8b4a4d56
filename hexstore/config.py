import os
from dataclasses import dataclass, field
from dotenv import find_dotenv, load_dotenv

# Settings of a store server, read from the environment (or a .env file).
# Command line options of the CLI take precedence over these.

_ENV_PREFIX = "HEXSTORE_"

def _default_use_symlinks() -> bool:
    return os.name != "nt"

@dataclass
class Settings:
    store_dir:str = "."
    host:str = "0.0.0.0"
    port:int = 8001
    auth_methods:list[str] = field(default_factory=lambda: ["mock"])
    use_symlinks:bool = field(default_factory=_default_use_symlinks)

    @classmethod
    def from_env(cls, load_env_file:bool=True) -> 'Settings':
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))
        settings = cls()
        settings.store_dir = os.getenv(_ENV_PREFIX+"STORE_DIR", settings.store_dir)
        settings.host = os.getenv(_ENV_PREFIX+"HOST", settings.host)
        port = os.getenv(_ENV_PREFIX+"PORT", None)
        if port is not None:
            settings.port = int(port)
        auth_methods = os.getenv(_ENV_PREFIX+"AUTH", None)
        if auth_methods is not None:
            settings.auth_methods = [m.strip() for m in auth_methods.split(",") if len(m.strip()) > 0]
        use_symlinks = os.getenv(_ENV_PREFIX+"USE_SYMLINKS", None)
        if use_symlinks is not None:
            settings.use_symlinks = use_symlinks.lower() in ("1", "true", "yes", "on")
        return settings
