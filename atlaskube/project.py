"""Project-level specification entries: IP access lists and private endpoints."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from atlaskube.common import ProviderName


@dataclass(frozen=True)
class IPAccessList:
    """One entry of a project's IP access list."""

    aws_security_group: str = ""
    cidr_block: str = ""
    comment: str = ""
    delete_after_date: str = ""
    ip_address: str = ""

    _FIELDS = (
        ("aws_security_group", "awsSecurityGroup"),
        ("cidr_block", "cidrBlock"),
        ("comment", "comment"),
        ("delete_after_date", "deleteAfterDate"),
        ("ip_address", "ipAddress"),
    )

    def to_atlas(self) -> dict[str, str]:
        """Return the entry in the wire format Atlas accepts."""
        return {key: getattr(self, attr) for attr, key in self._FIELDS if getattr(self, attr)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IPAccessList:
        return cls(**{attr: data.get(key, "") for attr, key in cls._FIELDS})

    def identifier(self) -> str:
        """Return the value identifying the entry; only one of its parts should be set."""
        return self.cidr_block + self.aws_security_group + self.ip_address

    def with_comment(self, comment: str) -> IPAccessList:
        return replace(self, comment=comment)

    def with_ip(self, ip: str) -> IPAccessList:
        return replace(self, ip_address=ip)

    def with_cidr(self, cidr: str) -> IPAccessList:
        return replace(self, cidr_block=cidr)

    def with_aws_group(self, group: str) -> IPAccessList:
        return replace(self, aws_security_group=group)

    def with_delete_after_date(self, date: str) -> IPAccessList:
        return replace(self, delete_after_date=date)


@dataclass(frozen=True)
class PrivateEndpoint:
    """A private endpoint requested for a project."""

    provider: ProviderName
    region: str
    id: str = ""
    ip: str = ""

    def to_atlas(self) -> dict[str, str]:
        """Return the endpoint in the wire format Atlas accepts."""
        result = {"provider": self.provider.value, "region": self.region}
        if self.id:
            result["id"] = self.id
        if self.ip:
            result["ip"] = self.ip
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PrivateEndpoint:
        return cls(
            provider=ProviderName(data["provider"]),
            region=data.get("region", ""),
            id=data.get("id", ""),
            ip=data.get("ip", ""),
        )