# Copyright (2025) Beijing Volcano Engine Technology Ltd.
# SPDX-License-Identifier: MIT

import json

# Known descriptions for error responses whose body is not a JSON error envelope.
CODE_ERR_DICT = {
    403: "api_key or JWT token error ",
    404: "session does not exist ",
    409: "session not use Media Router or session is already being recorded ",
    500: "OpenTok server error ",
}


class TokboxError(Exception):
    pass


class ResponseError(TokboxError):
    """Error reported by the OpenTok REST API."""

    def __init__(self, code, message="", description=""):
        super().__init__(code, message, description)
        self.code = code
        self.message = message
        self.description = description

    def __str__(self):
        return "message:%s description:%s" % (self.message, self.description)

    @classmethod
    def from_response(cls, status_code, body_text):
        try:
            payload = json.loads(body_text)
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            return cls(status_code, body_text, CODE_ERR_DICT.get(status_code, ""))

        return cls(
            payload.get("code") or status_code,
            payload.get("message") or "",
            payload.get("description") or "",
        )


class TokenSigningError(TokboxError):
    pass


class MalformedResponseError(TokboxError):
    pass


class SessionCreateError(TokboxError):
    pass
