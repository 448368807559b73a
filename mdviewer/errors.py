class MdviewerError(Exception):

    status_code = 500
    message = "internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidPath(MdviewerError):
    status_code = 400
    message = "invalid path"


class PathEscapesRoot(InvalidPath):
    pass


class NotMarkdownFile(MdviewerError):
    status_code = 400
    message = "only markdown files are supported"


class FileMissing(MdviewerError):
    status_code = 404
    message = "file not found"


class InvalidRequest(MdviewerError):
    status_code = 400
    message = "invalid request body"


class ConfigError(Exception):
    pass
