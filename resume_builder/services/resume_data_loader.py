"""Service for loading resume data from files or URLs."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
import yaml
from pydantic import BaseModel

from resume_builder.config import ResumeBuilderSettings, get_settings
from resume_builder.models.validation_models import ProcessedResume
from resume_builder.services.resume_processor import process_resume
from resume_builder.utils.clock import Clock, isoformat_utc, system_clock
from resume_builder.utils.logger import get_logger

logger = get_logger(__name__)

BUNDLED_DATA_DIR = Path(__file__).parent.parent / "data"
YAML_SUFFIXES = (".yaml", ".yml")


class ResumeDataError(Exception):
    """Raised when resume data cannot be loaded at all."""

    def __init__(self, message: str, code: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.timestamp = isoformat_utc(system_clock())


class LoadedResume(BaseModel):
    """Raw resume data together with where it came from."""

    data: Any
    source: str
    lastModified: Optional[str] = None


class ResumeDataLoader:
    """Service to load raw resume data from disk or over HTTP."""

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        settings: Optional[ResumeBuilderSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the resume data loader.

        Args:
            data_dir: Directory containing resume files. Defaults to settings.data_dir
            settings: Application settings (uses get_settings() if None)
            transport: Optional httpx transport used for URL fetches
        """
        self.settings = settings or get_settings()
        self.data_dir = Path(data_dir) if data_dir is not None else Path(self.settings.data_dir)
        self.transport = transport

    def load_resume(self, filename: Optional[str] = None) -> LoadedResume:
        """
        Load raw resume data from a JSON or YAML file.

        When no filename is given and the default resume file does not exist,
        the sample resume is loaded instead.

        Args:
            filename: File name inside data_dir. Defaults to settings.resume_file

        Returns:
            LoadedResume: Raw data, source path and modification time

        Raises:
            ResumeDataError: If the file is missing or cannot be parsed
        """
        filepath = self.data_dir / (filename or self.settings.resume_file)

        if not filepath.exists():
            if filename is None:
                sample_path = self._sample_path()
                logger.warning("%s not found, falling back to %s", filepath.name, sample_path)
                return self._read_file(sample_path)

            raise ResumeDataError(
                f"Resume file not found: {filepath}",
                "FILE_LOAD_ERROR",
                {"filePath": str(filepath)}
            )

        return self._read_file(filepath)

    async def fetch_resume(self, url: str, allow_fallback: bool = True) -> LoadedResume:
        """
        Fetch raw resume data over HTTP.

        A 404, or an HTML page served for a .json URL, falls back to the
        sample resume URL when the requested file is the default resume file.

        Args:
            url: URL of the resume JSON document
            allow_fallback: Whether the sample fallback may be used

        Returns:
            LoadedResume: Raw data, source URL and Last-Modified header

        Raises:
            ResumeDataError: On network failures, HTTP errors or invalid JSON
        """
        logger.info("Fetching resume data from %s", url)

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.fetch_timeout,
                transport=self.transport
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise ResumeDataError(
                f"Network error loading resume file: {e}",
                "NETWORK_ERROR",
                {"url": url, "originalError": str(e)}
            ) from e
        except Exception as e:
            raise ResumeDataError(
                f"Unexpected error loading resume file: {e}",
                "UNKNOWN_ERROR",
                {"url": url, "originalError": str(e)}
            ) from e

        is_html = "text/html" in response.headers.get("content-type", "")
        wants_json = httpx.URL(url).path.endswith(".json")

        if response.status_code >= 400 or (is_html and wants_json):
            sample_url = self._sample_url(url)
            if allow_fallback and sample_url and (response.status_code == 404 or is_html):
                logger.warning("%s unavailable, falling back to %s", url, sample_url)
                return await self.fetch_resume(sample_url, allow_fallback=False)

            raise ResumeDataError(
                f"Failed to load resume file: {response.status_code} {response.reason_phrase}",
                "FILE_LOAD_ERROR",
                {"status": response.status_code, "url": url}
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ResumeDataError(
                f"Invalid JSON format in resume file: {e}",
                "JSON_PARSE_ERROR",
                {"url": url, "originalError": str(e)}
            ) from e

        return LoadedResume(
            data=data,
            source=url,
            lastModified=response.headers.get("last-modified")
        )

    def load_and_process(
        self,
        filename: Optional[str] = None,
        clock: Optional[Clock] = None
    ) -> ProcessedResume:
        """
        Load a resume file and run it through the processing pipeline.

        Args:
            filename: File name inside data_dir
            clock: Source of the current time

        Returns:
            ProcessedResume: Enhanced data, validation result and metadata
        """
        loaded = self.load_resume(filename)
        return process_resume(loaded.data, clock=clock, last_modified=loaded.lastModified)

    def _sample_path(self) -> Path:
        local = self.data_dir / self.settings.sample_file
        return local if local.exists() else BUNDLED_DATA_DIR / self.settings.sample_file

    def _sample_url(self, url: str) -> Optional[str]:
        if self.settings.sample_url:
            return self.settings.sample_url
        base, _, name = url.rpartition("/")
        if name.split("?")[0] != self.settings.resume_file:
            return None
        return f"{base}/{self.settings.sample_file}"

    def _read_file(self, filepath: Path) -> LoadedResume:
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                if filepath.suffix.lower() in YAML_SUFFIXES:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except FileNotFoundError as e:
            raise ResumeDataError(
                f"Resume file not found: {filepath}",
                "FILE_LOAD_ERROR",
                {"filePath": str(filepath)}
            ) from e
        except json.JSONDecodeError as e:
            raise ResumeDataError(
                f"Invalid JSON format in resume file: {e}",
                "JSON_PARSE_ERROR",
                {"filePath": str(filepath), "originalError": str(e)}
            ) from e
        except yaml.YAMLError as e:
            raise ResumeDataError(
                f"Invalid YAML format in resume file: {e}",
                "JSON_PARSE_ERROR",
                {"filePath": str(filepath), "originalError": str(e)}
            ) from e
        except OSError as e:
            raise ResumeDataError(
                f"Error reading file {filepath}: {e}",
                "FILE_LOAD_ERROR",
                {"filePath": str(filepath), "originalError": str(e)}
            ) from e

        modified = datetime.fromtimestamp(filepath.stat().st_mtime, tz=timezone.utc)
        logger.info("Resume data loaded from %s", filepath)
        return LoadedResume(data=data, source=str(filepath), lastModified=isoformat_utc(modified))


# Singleton instance
_data_loader: Optional[ResumeDataLoader] = None


def get_data_loader(data_dir: Optional[Path] = None) -> ResumeDataLoader:
    """
    Get or create the resume data loader singleton.

    Args:
        data_dir: Optional directory for resume files

    Returns:
        ResumeDataLoader: The data loader instance
    """
    global _data_loader
    if _data_loader is None:
        _data_loader = ResumeDataLoader(data_dir)
    return _data_loader
