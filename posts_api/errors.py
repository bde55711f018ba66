class PostsApiError(Exception):
    status_code: int = 500


class ValidationError(PostsApiError):
    status_code = 400


class NotFoundError(PostsApiError):
    status_code = 404


class StoreError(PostsApiError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation


class ConfigurationError(PostsApiError):
    def __init__(self, name: str):
        super().__init__(f"{name} environment variable is required")
