from fastapi.responses import JSONResponse
import copy

RESPONSES = {
    "validation_error": {
        "status": 400,
        "message": "Bad Request",
        "details": "The request could not be understood. Check the body and parameters."
    },

    "empty_text": {
        "status": 400,
        "message": "Bad Request",
        "details": "A quote needs some text."
    },

    "auth_required": {
        "status": 401,
        "message": "Unauthorized",
        "details": "You must provide the authorization key to modify the quotes."
    },

    "invalid_auth_key": {
        "status": 401,
        "message": "Unauthorized",
        "details": "The provided authorization key is not valid."
    },

    "quote_not_found": {
        "status": 404,
        "message": "Not Found",
        "details": "There are no quotes to pick from."
    },

    "not_found": {
        "status": 404,
        "message": "Not Found",
        "details": "The requested URL was not found on this server."
    },

    "already_exists": {
        "status": 409,
        "message": "Conflict",
        "details": "A quote with the same text already exists."
    },

    "rate_limited": {
        "status": 429,
        "message": "Too Many Requests",
        "details": "You've sent too many requests. Slow down and try again later."
    },

    "internal_error": {
        "status": 500,
        "message": "Internal Server Error",
        "details": "Something went wrong while talking to the quote storage."
    },
}


def respond(response_code: str, **kwargs):
    """
    Give the client a detailed response from a template

    :param response_code: The code to respond with. e.g. 'already_exists'
    :param kwargs: Data to append to the response under the `extra` field.
    :return:
    """
    content = copy.copy(RESPONSES[response_code])

    content['code'] = response_code

    if kwargs:
        # noinspection PyTypeChecker
        content['extra'] = kwargs

    resp = JSONResponse(
        content=content,
        status_code=content['status']
    )
    return resp
