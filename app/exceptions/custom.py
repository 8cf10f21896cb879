class RenderError(Exception):
    def __init__(self, message: str, url: str | None = None):
        self.message = message
        self.url = url
        super().__init__(message)


class InvalidRequestError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
