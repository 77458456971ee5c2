from __future__ import annotations

import locale
from importlib import resources
from pathlib import Path
from typing import Dict, List, Literal, Optional
import yaml
from pydantic import BaseModel, Field, field_validator

# ---- Bank registry entries ----
class Bank(BaseModel):
    """One supported bank: display name, 4-character identifier, logo asset."""
    model_config = {"frozen": True}

    name: str
    code: str
    logo: str = ""

    @field_validator("code")
    @classmethod
    def _four_alnum(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) != 4 or not v.isalnum() or not v.isascii():
            raise ValueError(f"bank code must be 4 alphanumeric characters, got {v!r}")
        return v


def _name_key(bank: Bank) -> str:
    # locale-aware, case-insensitive ordering of display names
    return locale.strxfrm(bank.name.casefold())


class Registry(BaseModel):
    """Immutable table of banks, always sorted by display name."""
    model_config = {"frozen": True}

    banks: List[Bank] = Field(default_factory=list)

    @field_validator("banks")
    @classmethod
    def _unique_and_sorted(cls, v: List[Bank]) -> List[Bank]:
        seen: set[str] = set()
        for b in v:
            if b.code in seen:
                raise ValueError(f"duplicate bank code {b.code!r}")
            seen.add(b.code)
        return sorted(v, key=_name_key)

    @property
    def codes(self) -> List[str]:
        return [b.code for b in self.banks]

    def get(self, code: Optional[str]) -> Optional[Bank]:
        if not code:
            return None
        code = code.strip().upper()
        for b in self.banks:
            if b.code == code:
                return b
        return None

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.get(code) is not None

    def __len__(self) -> int:
        return len(self.banks)


# ---- Generator settings (tune without code changes) ----
class GeneratorConfig(BaseModel):
    country_code: Literal["PK"] = "PK"
    account_length: int = Field(16, ge=16, le=16)  # BBAN is 4 + 16 characters
    copied_reset_seconds: float = 2.0  # how long the "copied" flag stays on


# ---- Root config ----
class PkibanConfig(BaseModel):
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    registry: Registry = Field(default_factory=lambda: default_registry())


# ---- Loaders ----
def _registry_from_data(data: Dict) -> Registry:
    return Registry(banks=[Bank(**b) for b in (data.get("banks") or [])])


def default_registry() -> Registry:
    """Registry shipped with the package (pkiban/data/banks.yaml)."""
    text = resources.files("pkiban.data").joinpath("banks.yaml").read_text()
    return _registry_from_data(yaml.safe_load(text) or {})


def load_config(path: Optional[Path]) -> PkibanConfig:
    if not path:
        return PkibanConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    cfg = PkibanConfig(generator=GeneratorConfig(**(data.get("generator") or {})))
    if data.get("banks"):
        cfg = cfg.model_copy(update={"registry": _registry_from_data(data)})
    return cfg
