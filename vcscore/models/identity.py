"""User identity and commit signing configuration."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SigningFormat(str, Enum):
    OPENPGP = "OPENPGP"
    SSH = "SSH"
    UNKNOWN = "UNKNOWN"


class SigningStatus(BaseModel):
    """Commit signing settings derived from git config values."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    format: SigningFormat = SigningFormat.UNKNOWN
    signing_key: str | None = None

    @classmethod
    def from_git_config_values(
        cls,
        gpg_sign: str | None,
        gpg_format: str | None,
        signing_key: str | None,
        gpg_program: str | None = None,
    ) -> "SigningStatus":
        """
        Build signing status from raw ``git config --get`` values.

        Args:
            gpg_sign: Value of commit.gpgsign
            gpg_format: Value of gpg.format
            signing_key: Value of user.signingkey
            gpg_program: Value of gpg.program (currently informational only)

        Returns:
            SigningStatus
        """
        enabled = (gpg_sign or "").lower() in ("true", "always")

        fmt = (gpg_format or "").lower()
        if fmt == "openpgp":
            signing_format = SigningFormat.OPENPGP
        elif fmt == "ssh":
            signing_format = SigningFormat.SSH
        else:
            signing_format = SigningFormat.UNKNOWN

        key = signing_key if signing_key and signing_key.strip() else None
        return cls(enabled=enabled, format=signing_format, signing_key=key)

    def __str__(self) -> str:
        if not self.enabled:
            return "Disabled"
        key = self.signing_key or "Not Set"
        return f"Enabled (Format: {self.format.value}, Key: {key})"


class GitIdentity(BaseModel):
    """Who commits, how commits are signed, and which git is in use."""

    model_config = ConfigDict(frozen=True)

    user_name: str | None = None
    email: str | None = None
    signing: SigningStatus = SigningStatus()
    git_version: str | None = None
