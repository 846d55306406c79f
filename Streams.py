# Copyright (2025) Beijing Volcano Engine Technology Ltd.
# SPDX-License-Identifier: MIT

# 直播流列表接口参考 https://tokbox.com/developer/rest/#list_broadcasts
import json
from dataclasses import dataclass, field
from typing import Dict, List

from TokboxApiRequester import ListOptions
from TokboxConfig import BROADCAST_PATH


@dataclass
class RtmpTarget:
    server_url: str = ""
    stream_name: str = ""
    status: str = ""

    @classmethod
    def from_json(cls, payload):
        payload = payload or {}
        return cls(server_url=payload.get("serverUrl", ""),
                   stream_name=payload.get("streamName", ""),
                   status=payload.get("status", ""))

    def to_dict(self):
        return {"serverUrl": self.server_url, "streamName": self.stream_name, "status": self.status}


@dataclass
class BroadcastUrls:
    hls: str = ""
    rtmp: Dict[str, RtmpTarget] = field(default_factory=dict)   # keyed by rtmp target id

    @classmethod
    def from_json(cls, payload):
        payload = payload or {}
        rtmp = payload.get("rtmp") or {}
        return cls(hls=payload.get("hls", ""),
                   rtmp={name: RtmpTarget.from_json(target) for name, target in rtmp.items()})

    def to_dict(self):
        return {"hls": self.hls,
                "rtmp": {name: target.to_dict() for name, target in self.rtmp.items()}}


@dataclass
class StreamItem:
    id: str = ""
    session_id: str = ""
    project_id: int = 0
    created_at: int = 0
    updated_at: int = 0
    resolution: str = ""
    broadcast_urls: BroadcastUrls = field(default_factory=BroadcastUrls)
    status: str = ""

    @classmethod
    def from_json(cls, payload):
        payload = payload or {}
        return cls(id=payload.get("id", ""),
                   session_id=payload.get("sessionId", ""),
                   project_id=payload.get("projectId", 0),
                   created_at=payload.get("createdAt", 0),
                   updated_at=payload.get("updatedAt", 0),
                   resolution=payload.get("resolution", ""),
                   broadcast_urls=BroadcastUrls.from_json(payload.get("broadcastUrls")),
                   status=payload.get("status", ""))

    def to_dict(self):
        return {
            "id": self.id,
            "sessionId": self.session_id,
            "projectId": self.project_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "resolution": self.resolution,
            "broadcastUrls": self.broadcast_urls.to_dict(),
            "status": self.status,
        }


@dataclass
class StreamList:
    count: int = 0
    items: List[StreamItem] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload):
        payload = payload or {}
        return cls(count=payload.get("count", 0),
                   items=[StreamItem.from_json(item) for item in payload.get("items") or []])

    def to_json(self):
        return json.dumps({"count": self.count, "items": [s.to_dict() for s in self.items]}, indent="\t")


class StreamService:

    def __init__(self, client):
        self.client = client

    def list(self, options=None):
        options = options or ListOptions()
        path = BROADCAST_PATH % self.client.credentials.api_key
        return StreamList.from_json(self.client.get(path, params=options.params()))
