"""Server status use cases."""

from .list_servers import ListServersUseCase, ServerItem

__all__ = ["ListServersUseCase", "ServerItem"]
