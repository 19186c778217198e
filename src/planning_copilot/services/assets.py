"""Companion documents and the providers that supply them.

Each asset is looked up through a chain of providers; the first one that
returns non-empty text wins. The default chain tries the remote repository
first and falls back to the copy embedded in this package, so an install never
ends with a missing file, only with a possibly stale one.
"""

import asyncio
import logging
from enum import Enum
from importlib.resources import files
from typing import Optional, Protocol, Sequence

import aiohttp
from pydantic import BaseModel

from planning_copilot import config

logger = logging.getLogger(__name__)


class AssetGroup(str, Enum):
    AGENT = "agent"
    INSTRUCTIONS = "instructions"
    PROMPT = "prompt"
    STANDARD = "standard"
    TEMPLATE = "template"


class Asset(BaseModel):
    name: str
    label: str
    group: AssetGroup
    # Install location, relative to the project root
    target: str
    # Relative to the repository URL; None for local-only templates
    remote_path: Optional[str] = None
    # Relative to the package's assets/ directory
    embedded_path: str


class AssetUnavailableError(RuntimeError):
    """Raised when no provider in the chain can supply an asset."""


class AssetProvider(Protocol):
    name: str

    def get(self, asset: Asset) -> Optional[str]:
        """Return the asset text, or None if this provider cannot supply it."""
        ...


# --- Catalogue ---

_C = config.COPILOT_DIR
_G = config.GITHUB_DIR

AGENT = Asset(
    name="smart-agent",
    label="Smart agent",
    group=AssetGroup.AGENT,
    target=f"{_G}/agents/smart.agent.md",
    remote_path="agents/smart.agent.md",
    embedded_path="agents/smart.agent.md",
)

COPILOT_INSTRUCTIONS = Asset(
    name="copilot-instructions",
    label="copilot-instructions.md",
    group=AssetGroup.INSTRUCTIONS,
    target=f"{_G}/copilot-instructions.md",
    remote_path="templates/copilot-instructions.md",
    embedded_path="templates/copilot-instructions.md",
)

PROMPTS: list[Asset] = [
    Asset(
        name=name,
        label=f"{name}.md",
        group=AssetGroup.PROMPT,
        target=f"{_C}/prompts/{name}.md",
        remote_path=f"templates/prompts/{name}.md",
        embedded_path=f"prompts/{name}.md",
    )
    for name in ("setup-project", "code-audit")
]

# General first: it carries the core principles the others build on.
STANDARD_LANGUAGES: list[tuple[str, str]] = [
    ("general", "General programming"),
    ("rust", "Rust"),
    ("nodejs", "Node.js"),
    ("c", "C"),
    ("cpp", "C++"),
    ("golang", "Go"),
    ("python", "Python"),
]

STANDARDS: list[Asset] = [
    Asset(
        name=slug,
        label=f"{label} standards",
        group=AssetGroup.STANDARD,
        target=f"{_C}/standards/{slug}.md",
        remote_path=f"standards/{slug}.md",
        embedded_path=f"standards/{slug}.md",
    )
    for slug, label in STANDARD_LANGUAGES
]

GITIGNORE = Asset(
    name="gitignore",
    label=".gitignore",
    group=AssetGroup.TEMPLATE,
    target=f"{_C}/.gitignore",
    embedded_path="templates/gitignore.txt",
)

INSTRUCTIONS_TEMPLATE = Asset(
    name="instructions",
    label="Instructions template",
    group=AssetGroup.TEMPLATE,
    target=f"{_C}/instructions.md",
    embedded_path="templates/instructions.md",
)


def select_assets(with_standards: bool, minimal: bool) -> list[Asset]:
    """Return the provider-served assets for an install, in install order."""
    selected = [AGENT, COPILOT_INSTRUCTIONS]
    if not minimal:
        selected.extend(PROMPTS)
    if with_standards and not minimal:
        selected.extend(STANDARDS)
    return selected


# --- Providers ---


class RemoteAssetProvider:
    """Download assets from the raw-content repository URL."""

    name = "remote"

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.REPO_URL).rstrip("/")
        self.timeout = config.FETCH_TIMEOUT if timeout is None else timeout

    def url_for(self, asset: Asset) -> str:
        return f"{self.base_url}/{asset.remote_path}"

    def get(self, asset: Asset) -> Optional[str]:
        if asset.remote_path is None:
            return None
        url = self.url_for(asset)
        try:
            text = asyncio.run(self._download(url))
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            logger.warning("Could not download %s from %s: %s", asset.name, url, e)
            return None
        if not text or not text.strip():
            logger.warning("Downloaded %s from %s but it was empty", asset.name, url)
            return None
        logger.debug("Downloaded %s (%d chars) from %s", asset.name, len(text), url)
        return text

    async def _download(self, url: str) -> str:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as response:
                response.raise_for_status()
                return await response.text(encoding="utf-8")


class EmbeddedAssetProvider:
    """Read the copies shipped as package data."""

    name = "embedded"

    def __init__(self, package: str = "planning_copilot"):
        self.package = package

    def get(self, asset: Asset) -> Optional[str]:
        resource = files(self.package).joinpath("assets")
        for part in asset.embedded_path.split("/"):
            resource = resource.joinpath(part)
        try:
            text = resource.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.error("Embedded copy of %s is missing (%s)", asset.name, asset.embedded_path)
            return None
        return text if text.strip() else None


class FirstSuccessProvider:
    """Try providers in order; the first non-empty result wins."""

    def __init__(self, providers: Sequence[AssetProvider]):
        if not providers:
            raise ValueError("At least one asset provider is required")
        self.providers = list(providers)

    def fetch(self, asset: Asset) -> tuple[str, str]:
        """Return `(text, provider_name)` for `asset`.

        Raises:
            AssetUnavailableError: If every provider came back empty-handed
        """
        for provider in self.providers:
            text = provider.get(asset)
            if text and text.strip():
                return text, provider.name
            logger.debug("Provider %s had no content for %s", provider.name, asset.name)
        tried = ", ".join(p.name for p in self.providers)
        raise AssetUnavailableError(f"No provider could supply '{asset.name}' (tried: {tried})")


def default_provider(offline: bool = False) -> FirstSuccessProvider:
    """Remote first with embedded fallback, or embedded only when offline."""
    if offline or config.OFFLINE:
        return FirstSuccessProvider([EmbeddedAssetProvider()])
    return FirstSuccessProvider([RemoteAssetProvider(), EmbeddedAssetProvider()])
