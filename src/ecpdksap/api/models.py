from pydantic import BaseModel, ConfigDict, Field, model_validator

from ecpdksap.core.models import ScanCandidate


class KeysRequest(BaseModel):
    """Request model for generating a fresh recipient key set."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = Field("v2", alias="Version", description="Protocol variant: v0, v1 or v2")


class KeysResponse(BaseModel):
    """Freshly generated recipient keys. KEEP k AND v SAFE."""

    version: str = Field(..., description="Protocol variant the keys were generated for")
    k: str = Field(..., description="Spend private key (hex)")
    v: str = Field(..., description="View private key (hex)")
    K: str = Field(..., description="Spend public key (hex)")
    V: str = Field(..., description="View public key (hex, BN254 G1)")


class SendRequest(BaseModel):
    """Request model for deriving one stealth output."""

    model_config = ConfigDict(populate_by_name=True)

    spend_public_key: str = Field(..., alias="K", description="Recipient spend public key K (hex)")
    view_public_key: str = Field(..., alias="V", description="Recipient view public key V (hex)")
    version: str = Field(..., alias="Version", description="Protocol variant: v0, v1 or v2")
    view_tag_version: str = Field(
        "none",
        alias="ViewTagVersion",
        description="View tag scheme: none, v0-1byte, v0-2bytes, v1-1byte, v1-2bytes",
    )


class SendResponse(BaseModel):
    """Response model for a derived stealth output."""

    version: str = Field(..., description="Protocol variant used")
    R: str = Field(..., description="Published ephemeral point R (hex, BN254 G1)")
    public_key: str = Field(..., description="Stealth public key / pairing value (hex)")
    address: str | None = Field(None, description="Destination address (v2 only)")
    view_tag: str | None = Field(None, description="View tag (hex) if requested")


class ScanRequest(BaseModel):
    """
    Request model for scanning candidates.
    Field aliases match the command-line JSON (k, v, Rs, Version, ViewTags, ViewTagVersion).
    """

    model_config = ConfigDict(populate_by_name=True)

    k: str = Field(..., description="Spend private key (hex)")
    v: str = Field(..., description="View private key (hex)")
    rs: list[str] = Field(default_factory=list, alias="Rs", description="Ephemeral points R (hex)")
    version: str = Field(..., alias="Version", description="Protocol variant: v0, v1 or v2")
    view_tags: list[str | None] | None = Field(
        None, alias="ViewTags", description="Published view tags, one per R"
    )
    view_tag_version: str = Field("none", alias="ViewTagVersion", description="View tag scheme")
    on_error: str | None = Field(
        None, description="Per-request override of the batch policy: skip or abort"
    )

    @model_validator(mode="after")
    def _tags_align(self) -> "ScanRequest":
        if self.view_tags is not None and len(self.view_tags) != len(self.rs):
            raise ValueError(
                f"ViewTags has {len(self.view_tags)} entries but Rs has {len(self.rs)}"
            )
        return self

    def candidates(self) -> list[ScanCandidate]:
        tags = self.view_tags if self.view_tags is not None else [None] * len(self.rs)
        return [ScanCandidate(ephemeral=r, view_tag=t) for r, t in zip(self.rs, tags)]


class MatchModel(BaseModel):
    """One recovered output."""

    index: int = Field(..., description="Position of the candidate in Rs")
    R: str = Field(..., description="Ephemeral point of the matching candidate")
    public_key: str = Field(..., description="Recovered stealth public key / pairing value")
    address: str | None = Field(None, description="Recovered destination address (v2)")
    private_key: str | None = Field(None, description="One-time private key (v1, v2)")


class CandidateErrorModel(BaseModel):
    """A candidate skipped because of an input error."""

    index: int
    kind: str
    message: str


class ScanStatsModel(BaseModel):
    candidates: int
    scanned: int
    filtered_out: int
    recoveries: int
    failed: int
    avg_filter_ms: float
    avg_recovery_ms: float


class ScanResponse(BaseModel):
    """Response model for a scan."""

    version: str
    view_tag_version: str
    matches: list[MatchModel]
    errors: list[CandidateErrorModel]
    stats: ScanStatsModel
    truncated: bool = False
