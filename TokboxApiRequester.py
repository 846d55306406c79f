# Copyright (2025) Beijing Volcano Engine Technology Ltd.
# SPDX-License-Identifier: MIT

import logging
import time
import uuid
from dataclasses import dataclass

import jwt
import requests

from TokboxConfig import JWT_EXPIRE_SECONDS, REQUEST_TIMEOUT
from TokboxError import MalformedResponseError, ResponseError

logger = logging.getLogger(__name__)

AUTH_HEADER = "X-OPENTOK-AUTH"


def jwt_token(credentials, expire_seconds=JWT_EXPIRE_SECONDS):
    now = int(time.time())
    claims = {
        "iss": credentials.api_key,
        "ist": "project",
        "iat": now,
        "exp": now + expire_seconds,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(claims, credentials.partner_secret, algorithm="HS256")


# url query options, shared by archive and broadcast listing
@dataclass
class ListOptions:
    offset: int = 0        # default 0
    count: int = 0         # default 50 on the server
    session_id: str = ""   # default all sessions

    def params(self):
        query = {}
        if self.offset:
            query["offset"] = self.offset
        if self.count:
            query["count"] = self.count
        if self.session_id:
            query["session_id"] = self.session_id
        return query


def check_response_error(response):
    if 200 <= response.status_code < 300:
        return
    error = ResponseError.from_response(response.status_code, response.text)
    logger.warning("tokbox api error %s for %s: %s", response.status_code, response.url, error)
    raise error


def decode_response(response):
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError("response from %s is not json: %r" % (response.url, response.text[:200])) from e


def request_tokbox_api(http_session, http_request_method, url, credentials, json_body=None,
                       form_body=None, params=None, timeout=REQUEST_TIMEOUT):
    # 步骤1：生成鉴权 JWT，每个请求一个
    headers = {
        "Accept": "application/json",
        AUTH_HEADER: jwt_token(credentials),
    }
    if json_body is not None:
        headers["Content-Type"] = "application/json"

    # 步骤2：发起http请求
    sender = http_session if http_session is not None else requests
    logger.debug("tokbox api request %s %s params=%s", http_request_method, url, params)
    response = sender.request(http_request_method, url, headers=headers, json=json_body,
                              data=form_body, params=params, timeout=timeout)
    logger.debug("tokbox api response %s %s -> %s", http_request_method, url, response.status_code)

    # 步骤3：检查错误并解析返回
    check_response_error(response)
    return decode_response(response)
