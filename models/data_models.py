from enum import Enum
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple


BOT_MESSAGE_SUBTYPE = "bot_message"



class MessageKind(Enum):
    """Who (or what) authored a message, derived from its Slack subtype"""
    HUMAN = "human"
    BOT = "bot"
    SYSTEM = "system"

    @classmethod
    def from_subtype(cls, subtype: Optional[str]) -> "MessageKind":
        if not subtype:
            return cls.HUMAN
        if subtype == BOT_MESSAGE_SUBTYPE:
            return cls.BOT
        return cls.SYSTEM

    @property
    def counts_as_activity(self) -> bool:
        """Human and bot-authored messages keep a channel alive, system notices don't"""
        return self in (MessageKind.HUMAN, MessageKind.BOT)



@dataclass(frozen=True)
class Channel:
    id: str
    name: str
    is_member: bool = False
    is_archived: bool = False
    is_private: bool = False
    created: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Channel":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            is_member=data.get("is_member", False),
            is_archived=data.get("is_archived", False),
            is_private=data.get("is_private", False),
            created=data.get("created", 0),
        )

    def as_member(self) -> "Channel":
        return replace(self, is_member=True)



@dataclass(frozen=True)
class Message:
    ts: str
    text: str = ""
    subtype: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Message":
        return cls(
            ts=data.get("ts", ""),
            text=data.get("text", ""),
            subtype=data.get("subtype") or "",
        )

    @property
    def kind(self) -> MessageKind:
        return MessageKind.from_subtype(self.subtype)



@dataclass(frozen=True)
class Identity:
    user_id: str
    team: str = ""



@dataclass(frozen=True)
class ReconciliationResult:
    members: Tuple[Channel, ...] = ()
    joined: Tuple[Channel, ...] = ()
    failed: Tuple[Channel, ...] = ()
    skipped_private: Tuple[Channel, ...] = ()



@dataclass(frozen=True)
class EvaluationResult:
    archivable: Tuple[Channel, ...] = ()
    kept: Tuple[Channel, ...] = ()
    skipped: Tuple[Channel, ...] = ()



@dataclass(frozen=True)
class ArchiveReport:
    archived: Tuple[Channel, ...] = ()
    failed: Tuple[Channel, ...] = ()



@dataclass(frozen=True)
class WorkflowResult:
    identity: Identity
    channels: Tuple[Channel, ...] = ()
    reconciliation: ReconciliationResult = field(default_factory=ReconciliationResult)
    evaluation: EvaluationResult = field(default_factory=EvaluationResult)
    archive: ArchiveReport = field(default_factory=ArchiveReport)
