"""
Wire Encoder

Builds track/engage envelopes and encodes them the way the ingestion API
expects: JSON, base64, sent as the ``data`` field of a urlencoded form.
"""

import base64
import json
import secrets
import time
import urllib.parse
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, List, Union

MP_LIB = "python-http-fallback"


def generate_insert_id() -> str:
    """Dedup hint: unix millis in base 36 plus a random suffix"""
    return f"{_base36(int(time.time() * 1000))}-{secrets.token_hex(6)}"


def _base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    out = ""
    while value:
        value, rem = divmod(value, 36)
        out = digits[rem] + out
    return out or "0"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Event:
    """A single tracked event, properties already merged with super properties"""

    name: str
    distinct_id: str
    properties: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=utc_timestamp)
    insert_id: str = field(default_factory=generate_insert_id)

    @property
    def unix_time(self) -> int:
        return int(datetime.fromisoformat(self.timestamp).timestamp())


@dataclass(frozen=True)
class ProfileUpdate:
    """Profile "set" for a distinct id (last write wins remotely)"""

    distinct_id: str
    properties: Dict[str, Any] = field(default_factory=dict)


def build_event_envelope(event: Event, token: str) -> Dict[str, Any]:
    properties = {
        "token": token,
        "distinct_id": event.distinct_id,
        "time": event.unix_time,
        "$insert_id": event.insert_id,
    }
    properties.update(event.properties)
    properties["mp_lib"] = MP_LIB
    return {"event": event.name, "properties": properties}


def build_alias_envelope(alias: str, distinct_id: str, token: str) -> Dict[str, Any]:
    """$create_alias pairs the previous anonymous id with the resolved one"""
    return {
        "event": "$create_alias",
        "properties": {
            "token": token,
            "distinct_id": distinct_id,
            "alias": alias,
            "mp_lib": MP_LIB,
        },
    }


def build_profile_envelope(update: ProfileUpdate, token: str) -> Dict[str, Any]:
    to_set = dict(update.properties)
    # Reserved profile fields, only when supplied so a partial update can't blank them
    if "name" in to_set:
        to_set["$name"] = to_set["name"]
    if "email" in to_set:
        to_set["$email"] = to_set["email"]
    return {
        "$token": token,
        "$distinct_id": update.distinct_id,
        "$set": to_set,
    }


def encode_payload(payload: Union[Dict[str, Any], List[Dict[str, Any]]]) -> str:
    """JSON-serialize and base64-encode an envelope"""
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode_payload(data: str) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    return json.loads(base64.b64decode(data).decode("utf-8"))


def encode_form(payload: Union[Dict[str, Any], List[Dict[str, Any]]]) -> bytes:
    """Urlencoded request body: data=<base64 json>"""
    return urllib.parse.urlencode({"data": encode_payload(payload)}).encode("ascii")


def decode_form(body: bytes) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    fields = urllib.parse.parse_qs(body.decode("ascii"))
    return decode_payload(fields["data"][0])
