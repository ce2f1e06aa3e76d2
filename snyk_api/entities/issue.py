"""Project issues from the v1 aggregated-issues API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from snyk_api.entities.ignore import Ignore, IgnoredBy, IgnoreOptions
from snyk_api.models import as_dict, as_list, parse_timestamp
from snyk_api.resource import decode_json

if TYPE_CHECKING:
    from snyk_api.client import Client


def _strings(data: dict, key: str) -> list[str]:
    return [str(v) for v in as_list(data.get(key), key)]


@dataclass
class Identifiers:
    cve: list[str] = field(default_factory=list)
    cwe: list[str] = field(default_factory=list)
    ghsa: list[str] = field(default_factory=list)


@dataclass
class Patch:
    id: str = ""
    urls: list[str] = field(default_factory=list)
    version: str = ""
    comments: list[str] = field(default_factory=list)
    modification_time: datetime | None = None


@dataclass
class IssueData:
    """Vulnerability details of an aggregated issue."""

    id: str = ""
    title: str = ""
    severity: str = ""
    url: str = ""
    description: str = ""
    identifiers: Identifiers = field(default_factory=Identifiers)
    credit: list[str] = field(default_factory=list)
    exploit_maturity: str = ""
    semver: Any = None
    publication_time: datetime | None = None
    disclosure_time: datetime | None = None
    cvss_v3: str = ""
    cvss_score: float = 0.0
    language: str = ""
    patches: list[Patch] = field(default_factory=list)
    nearest_fixed_in_version: str = ""
    is_malicious_package: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> IssueData:
        data = as_dict(data, "issueData")
        identifiers = as_dict(data.get("identifiers"), "identifiers")
        patches = [as_dict(p, "patch") for p in as_list(data.get("patches"), "patches")]
        return cls(
            id=data.get("id") or "",
            title=data.get("title") or "",
            severity=data.get("severity") or "",
            url=data.get("url") or "",
            description=data.get("description") or "",
            identifiers=Identifiers(
                cve=_strings(identifiers, "CVE"),
                cwe=_strings(identifiers, "CWE"),
                ghsa=_strings(identifiers, "GHSA"),
            ),
            credit=_strings(data, "credit"),
            exploit_maturity=data.get("exploitMaturity") or "",
            semver=data.get("semver"),
            publication_time=parse_timestamp(data.get("publicationTime")),
            disclosure_time=parse_timestamp(data.get("disclosureTime")),
            cvss_v3=data.get("CVSSv3") or "",
            cvss_score=float(data.get("cvssScore") or 0.0),
            language=data.get("language") or "",
            patches=[
                Patch(
                    id=p.get("id") or "",
                    urls=_strings(p, "urls"),
                    version=p.get("version") or "",
                    comments=_strings(p, "comments"),
                    modification_time=parse_timestamp(p.get("modificationTime")),
                )
                for p in patches
            ],
            nearest_fixed_in_version=data.get("nearestFixedInVersion") or "",
            is_malicious_package=bool(data.get("isMaliciousPackage", False)),
        )


@dataclass
class PriorityFactor:
    name: str = ""
    description: str = ""


@dataclass
class Priority:
    score: int = 0
    factors: list[PriorityFactor] = field(default_factory=list)


@dataclass
class IgnoreReason:
    path: list[str] = field(default_factory=list)
    reason: str = ""
    source: str = ""
    ignored_by: IgnoredBy = field(default_factory=IgnoredBy)
    reason_type: str = ""
    disregard_if_fixable: bool = False


@dataclass
class FixInfo:
    is_upgradable: bool = False
    is_pinnable: bool = False
    is_patchable: bool = False
    is_fixable: bool = False
    is_partially_fixable: bool = False
    nearest_fixed_in_version: str = ""
    fixed_in: list[str] = field(default_factory=list)


@dataclass
class Issue:
    """
    An aggregated issue of a project.

    Issues built from an ``IssueV2`` only carry ``id``, ``issue_type``,
    ``is_ignored`` and the ancestor IDs, which is all the ignore operations
    need.
    """

    id: str
    issue_type: str = ""
    pkg_name: str = ""
    pkg_versions: list[str] = field(default_factory=list)
    priority_score: int = 0
    priority: Priority = field(default_factory=Priority)
    issue_data: IssueData = field(default_factory=IssueData)
    is_patched: bool = False
    is_ignored: bool = False
    ignore_reasons: list[IgnoreReason] = field(default_factory=list)
    fix_info: FixInfo = field(default_factory=FixInfo)
    paths_link: str = ""
    org_id: str = ""
    project_id: str = ""
    project_origin: str = ""
    client: Client | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(
        cls, data: Any, client: Client, org_id: str, project_id: str, project_origin: str = ""
    ) -> Issue:
        data = as_dict(data, "issue")
        priority = as_dict(data.get("priority"), "priority")
        factors = [as_dict(f, "priority factor") for f in as_list(priority.get("factors"), "priority factors")]
        reasons = [as_dict(r, "ignore reason") for r in as_list(data.get("ignoreReasons"), "ignoreReasons")]
        fix_info = as_dict(data.get("fixInfo"), "fixInfo")
        links = as_dict(data.get("links"), "links")
        return cls(
            id=data.get("id") or "",
            issue_type=data.get("issueType") or "",
            pkg_name=data.get("pkgName") or "",
            pkg_versions=_strings(data, "pkgVersions"),
            priority_score=data.get("priorityScore") or 0,
            priority=Priority(
                score=priority.get("score") or 0,
                factors=[PriorityFactor(f.get("name") or "", f.get("description") or "") for f in factors],
            ),
            issue_data=IssueData.from_dict(data.get("issueData")),
            is_patched=bool(data.get("isPatched", False)),
            is_ignored=bool(data.get("isIgnored", False)),
            ignore_reasons=[
                IgnoreReason(
                    path=_strings(r, "path"),
                    reason=r.get("reason") or "",
                    source=r.get("source") or "",
                    ignored_by=IgnoredBy.from_dict(r.get("ignoredBy")),
                    reason_type=r.get("reasonType") or "",
                    disregard_if_fixable=bool(r.get("disregardIfFixable", False)),
                )
                for r in reasons
            ],
            fix_info=FixInfo(
                is_upgradable=bool(fix_info.get("isUpgradable", False)),
                is_pinnable=bool(fix_info.get("isPinnable", False)),
                is_patchable=bool(fix_info.get("isPatchable", False)),
                is_fixable=bool(fix_info.get("isFixable", False)),
                is_partially_fixable=bool(fix_info.get("isPartiallyFixable", False)),
                nearest_fixed_in_version=fix_info.get("nearestFixedInVersion") or "",
                fixed_in=_strings(fix_info, "fixedIn"),
            ),
            paths_link=links.get("paths") or "",
            org_id=org_id,
            project_id=project_id,
            project_origin=project_origin,
            client=client,
        )

    @property
    def _ignore_path(self) -> str:
        return f"/v1/org/{self.org_id}/project/{self.project_id}/ignore/{self.id}"

    def get_ignore(self) -> Ignore:
        return Ignore.from_dict(decode_json(self.client.get(self._ignore_path)))

    def add_ignore(self, options: IgnoreOptions) -> None:
        options.validate()
        self.client.post(self._ignore_path, body=options.to_dict())

    def replace_ignore(self, options: IgnoreOptions) -> None:
        """Replace the existing ignore of this issue."""
        options.validate()
        self.client.put(self._ignore_path, body=options.to_dict())

    def delete_ignore(self) -> None:
        self.client.delete(self._ignore_path)
