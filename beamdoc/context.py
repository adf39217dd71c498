"""Long-lived state shared by the CLI and the HTTP service."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .config import BeamDocConfig, load_config
from .info import InfoRenderer
from .loader import load_documentation
from .logging import get_logger
from .models import DocumentationModel
from .stores import DecodeCache

BEAM_SUFFIX = ".beam"


class ModuleResolver:
    """Maps module names to ``<dir>/<module>.beam`` over fixed search paths."""

    def __init__(self, search_paths: Sequence[Path] = ()) -> None:
        self.search_paths: List[Path] = [Path(path) for path in search_paths]
        self._memo: Dict[str, Optional[Path]] = {}
        self.logger = get_logger("resolver")

    def resolve(self, module: str) -> Path:
        if module in self._memo:
            found = self._memo[module]
        else:
            found = self._search(module)
            self._memo[module] = found
        if found is None:
            searched = ", ".join(str(path) for path in self.search_paths) or "(no search paths)"
            raise FileNotFoundError(f"No {module}{BEAM_SUFFIX} found in {searched}")
        return found

    def reset(self) -> None:
        self._memo.clear()

    def _search(self, module: str) -> Optional[Path]:
        for directory in self.search_paths:
            candidate = directory / f"{module}{BEAM_SUFFIX}"
            if candidate.is_file():
                self.logger.debug("Resolved %s to %s", module, candidate)
                return candidate
        self.logger.debug("Module %s not found in %d search paths", module, len(self.search_paths))
        return None


class DocContext:
    """Holds configuration, the decode cache and the module resolver."""

    def __init__(
        self,
        config: BeamDocConfig | None = None,
        *,
        cache: DecodeCache | None = None,
        resolver: ModuleResolver | None = None,
        renderer: InfoRenderer | None = None,
    ) -> None:
        self.config = config or BeamDocConfig(root=Path.cwd())
        language = self.config.language
        self.cache = cache or DecodeCache(partial(load_documentation, language=language))
        self.resolver = resolver or ModuleResolver(self.config.search_paths)
        self.renderer = renderer or InfoRenderer(summary_limit=self.config.summary_max_length)
        self.logger = get_logger("context")

    @classmethod
    def from_config_path(cls, path: Path | str = ".") -> "DocContext":
        return cls(load_config(Path(path)))

    def resolve(self, target: str) -> Path:
        """Accept a path to a BEAM file or a bare module name."""
        candidate = Path(target).expanduser()
        if candidate.suffix == BEAM_SUFFIX or candidate.is_file():
            if not candidate.is_file():
                raise FileNotFoundError(f"BEAM file not found: {target}")
            return candidate
        return self.resolver.resolve(target)

    def load(self, target: str) -> DocumentationModel:
        path = self.resolve(target)
        if not self.config.cache.enabled:
            return load_documentation(path, language=self.config.language)
        return self.cache.get_or_decode(path)

    def render_unit(self, target: str) -> str:
        return self.renderer.render_unit(self.load(target))

    def render_node(self, target: str, key: str) -> str:
        return self.renderer.render_node(self.load(target), key)

    def reset(self) -> None:
        """Drop cached models and resolver lookups."""
        self.cache.clear()
        self.resolver.reset()
        self.logger.debug("Context reset")


__all__ = ["BEAM_SUFFIX", "DocContext", "ModuleResolver"]
