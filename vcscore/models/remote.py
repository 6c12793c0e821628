"""Remote and upstream models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RemoteProtocol(str, Enum):
    HTTPS = "HTTPS"
    SSH = "SSH"
    GIT = "GIT"
    FILE = "FILE"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_url(cls, url: str) -> "RemoteProtocol":
        if url.startswith(("https://", "http://")):
            return cls.HTTPS
        if url.startswith("ssh://") or "@" in url:
            return cls.SSH
        if url.startswith("git://"):
            return cls.GIT
        if url.startswith(("file://", "/")):
            return cls.FILE
        return cls.UNKNOWN


class GitRemote(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    fetch_url: str
    push_url: str
    protocol: RemoteProtocol = RemoteProtocol.UNKNOWN


class GitUpstream(BaseModel):
    """Tracking branch of the current branch."""

    model_config = ConfigDict(frozen=True)

    remote: str
    branch: str

    @classmethod
    def from_ref(cls, ref: str) -> "GitUpstream":
        """Split ``origin/main`` into remote and branch (remote defaults to origin)."""
        if "/" in ref:
            remote, branch = ref.split("/", 1)
            return cls(remote=remote, branch=branch)
        return cls(remote="origin", branch=ref)
