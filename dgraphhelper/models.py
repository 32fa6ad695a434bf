# Copyright The Volcano Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from dgraphhelper.constants import LOCAL_HOST, NOT_READY_MARKER, SUCCESS_CODE


class Readiness(Enum):
    """Outcome of waiting for an instance's HTTP endpoint"""
    READY = "ready"
    NOT_READY = "not_ready"


@dataclass(frozen=True)
class InstanceHandle:
    port: int
    instance_id: str
    ready: bool = True

    @property
    def base_url(self) -> str:
        return f"http://{LOCAL_HOST}:{self.port}"


@dataclass
class AdminResponse:
    """Decoded reply of the form ``{"data": {"code", "message"}, "errors": [{"message"}]}``"""
    code: Optional[str] = None
    message: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> "AdminResponse":
        if not isinstance(payload, dict):
            return cls()
        data = payload.get("data") or {}
        if not isinstance(data, dict):
            data = {}
        errors = []
        for entry in payload.get("errors") or []:
            if isinstance(entry, dict):
                errors.append(str(entry.get("message") or ""))
            else:
                errors.append(str(entry))
        return cls(code=data.get("code"), message=data.get("message"), errors=errors)

    @property
    def succeeded(self) -> bool:
        return self.code == SUCCESS_CODE

    @property
    def not_ready(self) -> bool:
        return any(NOT_READY_MARKER in message for message in self.errors)

    @property
    def recognized(self) -> bool:
        return self.code is not None or bool(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "errors": list(self.errors)}
