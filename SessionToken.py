# Copyright (2025) Beijing Volcano Engine Technology Ltd.
# SPDX-License-Identifier: MIT

# token 格式参考 https://tokbox.com/developer/guides/create-token/
# 与官方 server SDK 生成的 "T1==" token 保持一致
import base64
import binascii
import hashlib
import hmac
import logging
import random
import threading
import time
from urllib.parse import quote_plus, unquote_plus

from TokboxError import TokboxError, TokenSigningError

logger = logging.getLogger(__name__)

TOKEN_SENTINEL = "T1=="
NONCE_UPPER_BOUND = 999999

ROLE_PUBLISHER = "publisher"
ROLE_SUBSCRIBER = "subscriber"
ROLE_MODERATOR = "moderator"

# expiration presets, in seconds
DAYS_30 = 2592000
WEEKS_1 = 604800
HOURS_24 = 86400
HOURS_2 = 7200
HOURS_1 = 3600


class SessionToken:
    # Initializes token struct by required parameters.
    def __init__(self, api_key, partner_secret, session_id, role=ROLE_PUBLISHER,
                 connection_data="", expiration=0):
        if not session_id:
            raise ValueError("session_id must not be empty")
        self.api_key = api_key
        self.partner_secret = partner_secret
        self.session_id = session_id
        self.role = role or ""
        self.connection_data = connection_data or ""
        self.issued_at = int(time.time())
        self.nonce = random.randrange(NONCE_UPPER_BOUND)
        self.expire_at = self.issued_at + expiration if expiration > 0 else 0
        self.signature = None

    # Claims in the fixed order the server verifies them in; nonce always last.
    def claims(self):
        items = [
            ("session_id", self.session_id),
            ("create_time", self.issued_at),
        ]
        if self.expire_at > 0:
            items.append(("expire_time", self.expire_at))
        if self.role:
            items.append(("role", self.role))
        if self.connection_data:
            items.append(("connection_data", self.connection_data))
        items.append(("nonce", self.nonce))
        return items

    def pack_msg(self):
        return "&".join("%s=%s" % (k, quote_plus(str(v), safe="")) for k, v in self.claims())

    # Serialize generates the token string
    def serialize(self):
        msg = self.pack_msg()
        self.signature = sign(self.partner_secret, msg)
        precoded = "partner_id=%s&sig=%s:%s" % (self.api_key, self.signature, msg)
        return TOKEN_SENTINEL + base64.b64encode(precoded.encode("utf-8")).decode("utf-8")

    # Verify checks if this token valid, called by server side.
    def verify(self, key):
        if 0 < self.expire_at < int(time.time()):
            return False
        if not self.signature:
            return False

        return hmac.compare_digest(sign(key, self.pack_msg()), self.signature)


# HMAC-SHA1 over the claims string, lowercase hex.
def sign(secret, msg):
    payload = msg.encode("utf-8")
    try:
        mac = hmac.new(secret.encode("utf-8"), payload, hashlib.sha1)
        digest = mac.hexdigest()
    except (AttributeError, TypeError, ValueError) as e:
        raise TokenSigningError("hmac failed over %d bytes: %s" % (len(payload), e)) from e

    if len(digest) != 2 * hashlib.sha1().digest_size:
        raise TokenSigningError("hmac digest has %d hex chars, expected %d"
                                % (len(digest), 2 * hashlib.sha1().digest_size))
    return digest


# Parse retrieves token information from raw string
def parse(raw):
    if not raw or not raw.startswith(TOKEN_SENTINEL):
        return None

    try:
        precoded = base64.b64decode(raw[len(TOKEN_SENTINEL):], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        logger.debug("token payload is not base64: %s", e)
        return None

    head, sep, msg = precoded.partition(":")
    if not sep or not head.startswith("partner_id=") or "&sig=" not in head:
        return None
    api_key, _, signature = head[len("partner_id="):].partition("&sig=")

    fields = {}
    for pair in msg.split("&"):
        k, _, v = pair.partition("=")
        fields[k] = unquote_plus(v)

    try:
        token = SessionToken(api_key, "", fields["session_id"],
                             role=fields.get("role", ""),
                             connection_data=fields.get("connection_data", ""))
        token.issued_at = int(fields["create_time"])
        token.expire_at = int(fields.get("expire_time", 0))
        token.nonce = int(fields["nonce"])
    except (KeyError, ValueError) as e:
        logger.debug("token claims incomplete: %s", e)
        return None

    token.signature = signature
    return token


def generate_token(credentials, session_id, role=ROLE_PUBLISHER, connection_data="", expiration=0):
    if credentials is None:
        raise ValueError("credentials are required to sign a token")
    token = SessionToken(credentials.api_key, credentials.partner_secret, session_id,
                         role=role, connection_data=connection_data, expiration=expiration)
    return token.serialize()


# Mint n tokens for the same claims. Failed tokens are left out of the result,
# and with multithread=True the result is in completion order.
def generate_tokens(credentials, session_id, n, multithread=False, role=ROLE_PUBLISHER,
                    connection_data="", expiration=0):
    tokens = []

    def mint():
        try:
            return generate_token(credentials, session_id, role, connection_data, expiration)
        except (TokboxError, ValueError) as e:
            logger.debug("dropping token for session %s: %s", session_id, e)
            return None

    if not multithread:
        for _ in range(n):
            token = mint()
            if token is not None:
                tokens.append(token)
        return tokens

    lock = threading.Lock()

    def worker():
        token = mint()
        if token is not None:
            with lock:
                tokens.append(token)

    workers = [threading.Thread(target=worker) for _ in range(n)]
    for t in workers:
        t.start()
    for t in workers:
        t.join()
    return tokens
