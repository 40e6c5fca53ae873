from fastapi import status

from todo_service.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    """
    500-class failure. The message is replaced by a generic one unless
    expose_message is set for faults the client is meant to see.
    """

    def __init__(self, base_error: Error, expose_message: bool = False):
        self.base_error = base_error
        self.expose_message = expose_message
        super().__init__(base_error.message)
