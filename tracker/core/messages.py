"""Client-facing message strings shared by routers and services."""

# errors
ERROR_NOT_FOUND = "Could not find ticket with id"
ERROR_INVALID_ID = "ID must be an integer higher than 0"
ERROR_INVALID_JSON = "Malformed JSON sent"
ERROR_COULD_NOT_CREATE_TICKET = "Could not create ticket"
ERROR_COULD_NOT_GET = "Could not get ticket(s)"
ERROR_COULD_NOT_UPDATE = "Could not update ticket with id"
ERROR_COULD_NOT_DELETE = "Could not delete ticket with id"
ERROR_CANNOT_LOGOUT = "Could not log you out"
ERROR_NOT_LOGGED_IN = "You're not logged in"
ERROR_INVALID_TOKEN = "Invalid or expired token"
ERROR_COULD_NOT_CREATE_USER = "Could not create user"
ERROR_INCORRECT_PASSWORD = "Incorrect email or password"
ERROR_NO_USER_FOUND = "No user found"
ERROR_USER_ALREADY_EXISTS = "User with that email already exists"

# success
SUCCESS_LOGOUT = "Successfully logged out"


def with_id(message: str, ticket_id: int) -> str:
    return f"{message} {ticket_id}"
