# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""Codec configuration backed by OmegaConf.

Summary
-------
``CodecConfig`` collects the knobs of the text codec. ``load_config`` layers
an optional YAML file and dotlist overrides on top of the structured
defaults, e.g. ``load_config("pcm.yaml", ["float_format=fixed"])``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from omegaconf import OmegaConf

from pcm.types import FLOAT_FORMATS


@dataclass
class CodecConfig:
    """Configuration for :func:`pcm.map.dumps` and :func:`pcm.map.loads`.

    Parameters
    ----------
    float_format : str, optional
        ``"shortest"`` (default) or ``"fixed"`` coordinate rendering.
    strict : bool, optional
        Raise on the first decode problem instead of collecting it.
    warn_on_issues : bool, optional
        Log a warning summarising dropped lines after a lenient decode.
    """

    float_format: str = "shortest"
    strict: bool = False
    warn_on_issues: bool = True

    def __post_init__(self) -> None:
        if self.float_format not in FLOAT_FORMATS:
            raise ValueError(
                f"float_format must be one of {', '.join(FLOAT_FORMATS)}; got {self.float_format!r}"
            )


def load_config(
    path: Optional[str | Path] = None, overrides: Iterable[str] = ()
) -> CodecConfig:
    """Build a :class:`CodecConfig` from defaults, ``path`` and ``overrides``.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but missing.
    omegaconf.errors.ConfigKeyError
        If the YAML file or an override names an unknown key.
    ValueError
        If a value fails validation.
    """

    cfg = OmegaConf.structured(CodecConfig)
    if path is not None:
        file = Path(path)
        if not file.exists():
            raise FileNotFoundError(f"config file not found: {file}")
        cfg = OmegaConf.merge(cfg, OmegaConf.load(file))
    dotlist = list(overrides)
    if dotlist:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(dotlist))
    obj = OmegaConf.to_object(cfg)
    assert isinstance(obj, CodecConfig)
    return obj


__all__ = ["CodecConfig", "load_config"]
