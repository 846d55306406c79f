# Copyright (2025) Beijing Volcano Engine Technology Ltd.
# SPDX-License-Identifier: MIT

# 录制接口参考 https://tokbox.com/developer/rest/#start_archive
# 单个 archive 最长 120 分钟，composed 模式建议不超过 5 路流
import json
from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional

from TokboxApiRequester import ListOptions
from TokboxConfig import ARCHIVE_PATH


# request body
@dataclass
class ArchiveRequest:
    session_id: str
    has_audio: bool = True
    has_video: bool = True
    layout_type: str = ""         # bestFit | custom | horizontalPresentation | pip | verticalPresentation
    layout_stylesheet: str = ""   # only used with layout_type == custom
    name: str = ""                # (Optional) The name of the archive (for your own identification)
    output_mode: str = ""         # composed (default) | individual
    resolution: str = ""          # 640x480 (default) | 1280x720

    def to_body(self):
        body = {
            "sessionId": self.session_id,
            "hasAudio": self.has_audio,
            "hasVideo": self.has_video,
        }
        if self.layout_type:
            body["layout"] = {"type": self.layout_type}
            if self.layout_stylesheet:
                body["layout"]["stylesheet"] = self.layout_stylesheet
        if self.name:
            body["name"] = self.name
        if self.output_mode:
            body["outputMode"] = self.output_mode
        if self.resolution:
            body["resolution"] = self.resolution
        return body


# response
@dataclass
class Archive:
    id: str = ""   # archive id
    session_id: str = ""
    project_id: int = 0
    created_at: int = 0
    duration: int = 0
    has_audio: bool = False
    has_video: bool = False
    name: str = ""
    output_mode: str = ""
    reason: str = ""
    resolution: str = ""
    size: int = 0
    status: str = ""
    url: Optional[Any] = None

    _JSON_KEYS = {
        "id": "id",
        "session_id": "sessionId",
        "project_id": "projectId",
        "created_at": "createdAt",
        "duration": "duration",
        "has_audio": "hasAudio",
        "has_video": "hasVideo",
        "name": "name",
        "output_mode": "outputMode",
        "reason": "reason",
        "resolution": "resolution",
        "size": "size",
        "status": "status",
        "url": "url",
    }

    @classmethod
    def from_json(cls, payload):
        payload = payload or {}
        return cls(**{attr: payload[key] for attr, key in cls._JSON_KEYS.items()
                      if payload.get(key) is not None})

    def get_url(self):
        if self.url is None:
            return ""
        return str(self.url)

    def to_dict(self):
        values = asdict(self)
        return {key: values[attr] for attr, key in self._JSON_KEYS.items()}

    def to_json(self):
        return json.dumps(self.to_dict(), indent=4)


@dataclass
class ArchiveList:
    count: int = 0
    items: List[Archive] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload):
        payload = payload or {}
        return cls(count=payload.get("count", 0),
                   items=[Archive.from_json(item) for item in payload.get("items") or []])

    def to_json(self):
        return json.dumps({"count": self.count, "items": [a.to_dict() for a in self.items]}, indent=4)


class ArchiveService:

    def __init__(self, client):
        self.client = client

    def _path(self, *parts):
        return "/".join((ARCHIVE_PATH % self.client.credentials.api_key,) + parts)

    def start(self, request):
        if isinstance(request, str):
            request = ArchiveRequest(request)
        return Archive.from_json(self.client.post(self._path(), request.to_body()))

    def stop(self, archive_id):
        return Archive.from_json(self.client.post(self._path(archive_id, "stop")))

    def list(self, options=None):
        options = options or ListOptions()
        return ArchiveList.from_json(self.client.get(self._path(), params=options.params()))

    def get(self, archive_id):
        return Archive.from_json(self.client.get(self._path(archive_id)))

    def delete(self, archive_id):
        self.client.delete(self._path(archive_id))
