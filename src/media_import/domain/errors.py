class MediaImportError(Exception):
    """Base class for every error raised while resolving a media reference."""


class InvalidInputFormat(MediaImportError):
    pass


class UnknownFileCategory(MediaImportError):
    def __init__(self, category: str) -> None:
        super().__init__(f"File category '{category}' is not handled.")
        self.category = category


class InvalidUrl(MediaImportError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid url '{url}': {reason}")
        self.url = url
        self.reason = reason


class FetchFailed(MediaImportError):
    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"Tried to fetch file from url {url} but failed with error: {cause}")
        self.url = url
        self.cause = cause
