"""Storage service types and their DNS subdomain labels."""

from __future__ import annotations

from enum import Enum


class ServiceType(str, Enum):
    BLOB = "blob"
    QUEUE = "queue"
    FILE = "file"
    TABLE = "table"
    DATA_LAKE = "dfs"

    @property
    def subdomain(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | ServiceType") -> "ServiceType":
        """Return the service type for an enum member, name or subdomain label."""

        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown storage service type '{value}'")


__all__ = ["ServiceType"]
