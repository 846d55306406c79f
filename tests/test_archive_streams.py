"""Tests for archive management and broadcast listing request shapes."""

import json

import pytest

from Archive import Archive, ArchiveRequest
from Streams import StreamList
from TokboxApiRequester import ListOptions
from TokboxError import ResponseError

BASE = "https://api.example.test/v2/project/100"

ARCHIVE_PAYLOAD = {
    "createdAt": 1384221730555,
    "duration": 5049,
    "hasAudio": True,
    "hasVideo": True,
    "id": "b40ef09b-3811-4726-b508-e41a0f96c68f",
    "name": "The archive name",
    "outputMode": "composed",
    "projectId": 100,
    "reason": "",
    "resolution": "640x480",
    "sessionId": "1_MX4xMDB-",
    "size": 247748791,
    "status": "available",
    "url": None,
}


def test_start_posts_request_body(client, http_session):
    http_session.queue(200, ARCHIVE_PAYLOAD)

    archive = client.archive.start(ArchiveRequest("1_MX4xMDB-", name="The archive name",
                                                  layout_type="custom", layout_stylesheet="stream {}",
                                                  output_mode="composed"))

    call = http_session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == BASE + "/archive"
    assert call["json"] == {
        "sessionId": "1_MX4xMDB-",
        "hasAudio": True,
        "hasVideo": True,
        "layout": {"type": "custom", "stylesheet": "stream {}"},
        "name": "The archive name",
        "outputMode": "composed",
    }
    assert archive.id == "b40ef09b-3811-4726-b508-e41a0f96c68f"
    assert archive.session_id == "1_MX4xMDB-"
    assert archive.project_id == 100
    assert archive.get_url() == ""


def test_start_accepts_bare_session_id(client, http_session):
    http_session.queue(200, ARCHIVE_PAYLOAD)

    client.archive.start("1_MX4xMDB-")

    assert http_session.calls[0]["json"] == {"sessionId": "1_MX4xMDB-", "hasAudio": True, "hasVideo": True}


def test_stop_get_and_delete_paths(client, http_session):
    http_session.queue(200, dict(ARCHIVE_PAYLOAD, status="stopped"))
    http_session.queue(200, dict(ARCHIVE_PAYLOAD, url="https://cdn.example.test/a.mp4"))
    http_session.queue(204, text="")

    stopped = client.archive.stop("abc")
    fetched = client.archive.get("abc")
    assert client.archive.delete("abc") is None

    assert [(c["method"], c["url"]) for c in http_session.calls] == [
        ("POST", BASE + "/archive/abc/stop"),
        ("GET", BASE + "/archive/abc"),
        ("DELETE", BASE + "/archive/abc"),
    ]
    assert stopped.status == "stopped"
    assert fetched.get_url() == "https://cdn.example.test/a.mp4"


def test_list_sends_query_and_decodes_items(client, http_session):
    http_session.queue(200, {"count": 2, "items": [ARCHIVE_PAYLOAD, dict(ARCHIVE_PAYLOAD, id="second")]})

    result = client.archive.list(ListOptions(offset=10, count=2, session_id="1_MX4xMDB-"))

    assert http_session.calls[0]["params"] == {"offset": 10, "count": 2, "session_id": "1_MX4xMDB-"}
    assert result.count == 2
    assert [a.id for a in result.items] == ["b40ef09b-3811-4726-b508-e41a0f96c68f", "second"]
    assert json.loads(result.to_json())["items"][1]["id"] == "second"


def test_archive_errors_are_structured(client, http_session):
    http_session.queue(409, text="conflict")

    with pytest.raises(ResponseError) as exc:
        client.archive.start("1_MX4xMDB-")

    assert exc.value.code == 409
    assert exc.value.description.startswith("session not use Media Router")


def test_archive_to_json_uses_vendor_keys():
    archive = Archive.from_json(ARCHIVE_PAYLOAD)

    assert json.loads(archive.to_json()) == ARCHIVE_PAYLOAD


STREAM_LIST_PAYLOAD = {
    "count": 1,
    "items": [{
        "id": "bcast-1",
        "sessionId": "1_MX4xMDB-",
        "projectId": 100,
        "createdAt": 1437676551000,
        "updatedAt": 1437676551000,
        "resolution": "640x480",
        "broadcastUrls": {
            "hls": "http://server/fakepath/playlist.m3u8",
            "rtmp": {
                "foo": {"serverUrl": "rtmp://myfooserver/myfooapp", "streamName": "myfoostream",
                        "status": "live"},
            },
        },
        "status": "started",
    }],
}


def test_stream_list(client, http_session):
    http_session.queue(200, STREAM_LIST_PAYLOAD)

    result = client.streams.list(ListOptions(session_id="1_MX4xMDB-"))

    call = http_session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == BASE + "/broadcast"
    assert call["params"] == {"session_id": "1_MX4xMDB-"}
    item = result.items[0]
    assert result.count == 1
    assert item.broadcast_urls.hls.endswith("playlist.m3u8")
    assert item.broadcast_urls.rtmp["foo"].stream_name == "myfoostream"
    assert json.loads(result.to_json())["items"][0]["id"] == "bcast-1"


def test_stream_list_without_options(client, http_session):
    http_session.queue(200, {"count": 0, "items": []})

    result = client.streams.list()

    assert http_session.calls[0]["params"] == {}
    assert result.items == []


def test_stream_list_to_json_uses_vendor_keys():
    streams = StreamList.from_json(STREAM_LIST_PAYLOAD)

    dumped = json.loads(streams.to_json())

    assert dumped == STREAM_LIST_PAYLOAD
    assert StreamList.from_json(dumped) == streams
