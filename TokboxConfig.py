# Copyright (2025) Beijing Volcano Engine Technology Ltd.
# SPDX-License-Identifier: MIT

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


# Malformed values fall back to the default instead of breaking import.
def env_number(name, default, cast):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("ignoring malformed %s=%r, using %r", name, raw, default)
        return default


'''
# 鉴权 API KEY / PARTNER SECRET。前往 https://tokbox.com/account 的项目页面获取
export TOKBOX_API_KEY="4561****"
export TOKBOX_PARTNER_SECRET="b60d0b2568f3ea9731bd9d3f71be****"

# 测试环境或 Beta 项目可以改写 API 地址
export TOKBOX_API_HOST="https://api.opentok.com"
'''
API_KEY = os.environ.get("TOKBOX_API_KEY", "")
PARTNER_SECRET = os.environ.get("TOKBOX_PARTNER_SECRET", "")

API_HOST = os.environ.get("TOKBOX_API_HOST", "https://api.opentok.com")

# REST 路径
SESSION_CREATE_PATH = "/session/create"
ARCHIVE_PATH = "/v2/project/%s/archive"      # api_key
BROADCAST_PATH = "/v2/project/%s/broadcast"  # api_key

# 请求配置
REQUEST_TIMEOUT = env_number("TOKBOX_REQUEST_TIMEOUT", 10.0, float)   # 秒
# The server rejects JWTs whose exp is more than 5 minutes out.
JWT_EXPIRE_SECONDS = env_number("TOKBOX_JWT_EXPIRE_SECONDS", 180, int)


@dataclass(frozen=True)
class Credentials:
    api_key: str
    partner_secret: str = field(repr=False)

    @classmethod
    def from_env(cls):
        return cls(API_KEY, PARTNER_SECRET)
