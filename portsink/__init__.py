from .config import VERSION as __version__
from .listener import run, ListenerError, SetupError, AcceptError

__all__ = ["run", "ListenerError", "SetupError", "AcceptError", "__version__"]
