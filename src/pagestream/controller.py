"""The file-access collaborator the router talks to."""

from pagestream.files import FileStream
from pagestream.service import FileService


class Controller:
    """Delegates stream lookups to a ``FileService``.

    The router is constructed with a controller, so this is the seam to
    swap when the files come from somewhere other than the local disk.
    """

    __slots__ = ("service",)

    def __init__(self, service: FileService) -> None:
        self.service = service

    async def get_file_stream(self, path: str) -> FileStream:
        return await self.service.get_file_stream(path)
