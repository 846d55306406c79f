# Copyright (2025) Beijing Volcano Engine Technology Ltd.
# SPDX-License-Identifier: MIT

import logging
from dataclasses import dataclass, field

import SessionToken
import TokboxApiRequester
from Archive import ArchiveService
from Streams import StreamService
from TokboxConfig import (API_HOST, API_KEY, PARTNER_SECRET, REQUEST_TIMEOUT,
                          SESSION_CREATE_PATH, Credentials)
from TokboxError import MalformedResponseError, SessionCreateError

logger = logging.getLogger(__name__)

# The session will send streams using the OpenTok Media Router.
MEDIA_ROUTER = "disabled"
# The session will attempt to send streams directly between clients, relaying
# through the OpenTok TURN server when clients cannot connect.
P2P = "enabled"


@dataclass(frozen=True)
class Session:
    session_id: str
    credentials: Credentials = field(repr=False, compare=False)
    project_id: str = ""
    partner_id: str = ""
    create_dt: str = ""
    session_status: str = ""
    media_server_url: str = ""

    @classmethod
    def from_json(cls, payload, credentials):
        return cls(
            session_id=payload["session_id"],
            project_id=str(payload.get("project_id") or ""),
            partner_id=str(payload.get("partner_id") or ""),
            create_dt=payload.get("create_dt") or "",
            session_status=payload.get("session_status") or "",
            media_server_url=payload.get("media_server_url") or "",
            credentials=credentials,
        )

    def token(self, role=SessionToken.ROLE_PUBLISHER, connection_data="", expiration=0):
        return SessionToken.generate_token(self.credentials, self.session_id, role,
                                           connection_data, expiration)

    def tokens(self, n, multithread=False, role=SessionToken.ROLE_PUBLISHER,
               connection_data="", expiration=0):
        return SessionToken.generate_tokens(self.credentials, self.session_id, n, multithread,
                                            role, connection_data, expiration)


class Tokbox:

    def __init__(self, api_key=None, partner_secret=None, api_host=None, http_session=None,
                 timeout=None):
        self.credentials = Credentials(api_key if api_key is not None else API_KEY,
                                       partner_secret if partner_secret is not None else PARTNER_SECRET)
        self.api_host = (api_host or API_HOST).rstrip("/")
        self.http_session = http_session
        self.timeout = timeout if timeout is not None else REQUEST_TIMEOUT
        self.archive = ArchiveService(self)
        self.streams = StreamService(self)

    def jwt_token(self):
        return TokboxApiRequester.jwt_token(self.credentials)

    # Creates a new tokbox session. location is an IP hint for the media server region.
    def new_session(self, location="", media_mode=P2P):
        form = {}
        if location:
            form["location"] = location
        form["p2p.preference"] = media_mode

        try:
            result = TokboxApiRequester.request_tokbox_api(
                self.http_session, "POST", self.api_host + SESSION_CREATE_PATH, self.credentials,
                form_body=form, timeout=self.timeout)
        except MalformedResponseError as e:
            raise SessionCreateError("Tokbox returned a malformed session response") from e

        if not isinstance(result, list) or len(result) < 1:
            raise SessionCreateError("Tokbox did not return a session")
        if not isinstance(result[0], dict) or not result[0].get("session_id"):
            raise SessionCreateError("Tokbox returned a session without session_id: %r" % (result[0],))

        session = Session.from_json(result[0], self.credentials)
        logger.info("created tokbox session %s", session.session_id)
        return session

    # Wraps an already created session id so tokens can be minted for it.
    def session(self, session_id):
        return Session(session_id=session_id, credentials=self.credentials)

    def request(self, method, path, body=None, params=None):
        return TokboxApiRequester.request_tokbox_api(
            self.http_session, method, self.api_host + path, self.credentials,
            json_body=body, params=params, timeout=self.timeout)

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def post(self, path, body=None):
        return self.request("POST", path, body=body)

    def put(self, path, body=None):
        return self.request("PUT", path, body=body)

    def delete(self, path, params=None):
        return self.request("DELETE", path, params=params)
