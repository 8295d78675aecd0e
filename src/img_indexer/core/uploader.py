"""Upload bulk index files to Elasticsearch, via a generated curl script or directly."""

import os
import shlex
import stat
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import requests

from .places import Place
from ..utils.config_loader import DEFAULT_BULK_ENDPOINT
from ..utils.logging import log_and_display, get_configured_logger

logger = get_configured_logger("Uploader")

SCRIPT_NAME = "es-indexer.sh"
NDJSON_CONTENT_TYPE = "application/x-ndjson"
CURL_COMMAND = 'curl --fail -XPOST {endpoint} -H "Content-Type: {content_type}" --data-binary {payload}'


@dataclass
class UploadResult:
    """Result of running the upload script."""
    script_path: Path
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def build_upload_script(places: Iterable[Place], endpoint: str = DEFAULT_BULK_ENDPOINT) -> str:
    """
    Render the POSIX shell script that uploads one file per place.

    Lines, in order: shebang, status reset, start echo, one curl per place
    in catalog order, finish echo, exit with the last non-zero curl status.
    """
    lines = ["#!/bin/sh", "rc=0", 'echo "Uploading index files..."']
    for place in places:
        command = CURL_COMMAND.format(
            endpoint=shlex.quote(endpoint),
            content_type=NDJSON_CONTENT_TYPE,
            payload=shlex.quote(f"@{place.index_filename}"),
        )
        # keep going, but remember the last failing curl's status
        lines.append(f"{command} || rc=$?")
    lines.append('echo "Finished uploading index files"')
    lines.append("exit $rc")
    return "\n".join(lines) + "\n"


def write_upload_script(
    places: Iterable[Place],
    output_dir: Union[str, Path] = ".",
    endpoint: str = DEFAULT_BULK_ENDPOINT,
    script_name: str = SCRIPT_NAME,
) -> Path:
    """Write the upload script into ``output_dir`` and mark it executable."""
    script_path = Path(output_dir) / script_name
    script_path.parent.mkdir(parents=True, exist_ok=True)
    script_path.write_text(build_upload_script(places, endpoint), encoding="utf-8")

    mode = os.stat(script_path).st_mode
    os.chmod(script_path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script_path


def bulk_upload_index_files(
    places: Iterable[Place],
    output_dir: Union[str, Path] = ".",
    endpoint: str = DEFAULT_BULK_ENDPOINT,
    script_name: str = SCRIPT_NAME,
) -> Optional[UploadResult]:
    """
    Generate the curl upload script and execute it.

    The script runs from ``output_dir`` so the ``@file`` arguments resolve
    against the generated index files. A non-zero exit is logged as a warning.

    Returns:
        UploadResult, or None if the script could not be written or started
    """
    log_and_display("Uploading index files...", sticky=True, level="warning")

    try:
        script_path = write_upload_script(places, output_dir, endpoint, script_name)
        logger.info(f"Wrote upload script {script_path}")

        completed = subprocess.run(
            [f"./{script_name}"],
            cwd=str(Path(output_dir)),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.error(f"Unable to write or execute upload script: {e}", exc_info=True)
        log_and_display(f"❌ Upload script failed: {e}", sticky=True, log=False)
        return None

    result = UploadResult(
        script_path=script_path,
        exit_code=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    if result.success:
        log_and_display("Successfully uploaded index files", sticky=True)
    else:
        log_and_display(
            f"Execution returned non-zero value ({result.exit_code}): {result.stderr.strip()}",
            sticky=True,
            level="warning",
        )
    return result


def post_index_files(
    places: Iterable[Place],
    output_dir: Union[str, Path] = ".",
    endpoint: str = DEFAULT_BULK_ENDPOINT,
    session: Optional[requests.Session] = None,
    timeout: float = 30.0,
) -> Dict[str, bool]:
    """
    POST each bulk index file straight to the ``_bulk`` endpoint.

    Files are sent one at a time. Failures are logged and the next file is
    tried; nothing is retried.

    Returns:
        Mapping of place name to upload success
    """
    session = session or requests.Session()
    statuses: Dict[str, bool] = {}

    for place in places:
        path = Path(output_dir) / place.index_filename
        statuses[place.name] = False

        if not path.is_file():
            log_and_display(f"Skipping {place.name}: {path} not found", sticky=True, level="warning")
            continue

        try:
            with open(path, "rb") as body:
                response = session.post(
                    endpoint,
                    data=body,
                    headers={"Content-Type": NDJSON_CONTENT_TYPE},
                    timeout=timeout,
                )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, OSError, ValueError) as e:
            logger.error(f"Upload failed for {place.name}: {e}", exc_info=True)
            continue

        if not isinstance(payload, dict) or payload.get("errors"):
            failed = _failed_items(payload)
            log_and_display(
                f"Bulk upload for {place.name} reported {len(failed)} item error(s)",
                sticky=True,
                level="warning",
            )
            continue

        statuses[place.name] = True
        logger.info(f"Uploaded {path} ({len(payload.get('items', []))} items)")

    uploaded = sum(statuses.values())
    log_and_display(f"Uploaded {uploaded}/{len(statuses)} index files", sticky=True)
    return statuses


def _failed_items(payload: dict) -> List[dict]:
    failed = []
    if not isinstance(payload, dict):
        return failed
    for item in payload.get("items", []):
        for action in item.values():
            if isinstance(action, dict) and action.get("error"):
                failed.append(action)
    return failed
