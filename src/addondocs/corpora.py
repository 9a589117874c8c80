"""GitHub repositories that make up the documentation corpora."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from addondocs.models import Corpus


@dataclass(frozen=True, slots=True)
class CorpusSpec:
    """Where a corpus lives and how searches against it are scoped."""

    name: Corpus
    owner: str
    repo: str
    search_path: str
    search_qualifiers: str
    tag_base_path: str = ""
    branch: str = "main"

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def search_query(self, text: str) -> str:
        return f"{text} repo:{self.full_name} path:{self.search_path} {self.search_qualifiers}"

    def blob_url(self, repo_path: str) -> str:
        return f"https://github.com/{self.full_name}/blob/{self.branch}/{repo_path.lstrip('/')}"


EXPRESS_DOCS = CorpusSpec(
    name="express_sdk",
    owner="AdobeDocs",
    repo="express-add-ons-docs",
    search_path="src/pages",
    search_qualifiers="extension:md extension:mdx",
    tag_base_path="src/pages",
)

SPECTRUM_DOCS = CorpusSpec(
    name="spectrum_web_components",
    owner="adobe",
    repo="spectrum-web-components",
    search_path="packages",
    search_qualifiers="language:markdown",
)

CORPUS_SPECS: Dict[str, CorpusSpec] = {
    EXPRESS_DOCS.name: EXPRESS_DOCS,
    SPECTRUM_DOCS.name: SPECTRUM_DOCS,
}

SAMPLES_OWNER = "adobe-ccwebext"
SAMPLES_REPO = "adobe-express-add-on-samples"
SAMPLES_BASE_PATH = "samples"
