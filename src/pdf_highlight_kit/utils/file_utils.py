"""
File Utilities - Common file handling functions
"""

import shutil
from pathlib import Path
from typing import List, Optional
import logging
import chardet

logger = logging.getLogger(__name__)


def detect_file_encoding(file_path: str) -> str:
    """
    Detect the encoding of a text file

    Args:
        file_path: Path to the file

    Returns:
        Detected encoding name
    """
    try:
        with open(file_path, 'rb') as f:
            raw_data = f.read(10000)  # Read first 10KB
    except OSError as e:
        logger.warning(f"Error detecting encoding for {file_path}: {e}")
        return 'utf-8'

    result = chardet.detect(raw_data)
    encoding = result.get('encoding') or 'utf-8'
    confidence = result.get('confidence') or 0

    logger.debug(f"Detected encoding for {file_path}: {encoding} (confidence: {confidence:.2f})")

    # Fallback to utf-8 if confidence is low
    if confidence < 0.5:
        return 'utf-8'
    return encoding


def safe_read_text_file(file_path: str, encoding: Optional[str] = None) -> str:
    """
    Read a text file with encoding detection

    Args:
        file_path: Path to the file
        encoding: Specific encoding to use (optional)

    Returns:
        File contents as string
    """
    if not encoding:
        encoding = detect_file_encoding(file_path)

    try:
        with open(file_path, 'r', encoding=encoding) as f:
            return f.read()
    except (UnicodeDecodeError, LookupError):
        for fallback in ['utf-8', 'cp1252', 'latin-1']:
            if fallback == encoding:
                continue
            try:
                with open(file_path, 'r', encoding=fallback) as f:
                    logger.warning(f"Used fallback encoding {fallback} for {file_path}")
                    return f.read()
            except UnicodeDecodeError:
                continue
        raise


def read_search_targets(file_path: str) -> List[str]:
    """
    Read one search target per line, skipping blank lines

    Each line is stripped of surrounding whitespace.
    """
    content = safe_read_text_file(file_path)
    # BOM left behind by some editors
    content = content.lstrip('\ufeff')
    return [line.strip() for line in content.splitlines() if line.strip()]


def create_backup(file_path: str, backup_suffix: str = ".backup") -> Optional[str]:
    """
    Create a backup of a file

    Args:
        file_path: Path to the original file
        backup_suffix: Suffix to add to backup filename

    Returns:
        Path to backup file or None if the original does not exist
    """
    original_path = Path(file_path)
    if not original_path.exists():
        return None

    backup_path = original_path.with_suffix(original_path.suffix + backup_suffix)
    shutil.copy2(file_path, str(backup_path))

    logger.info(f"Created backup: {backup_path}")
    return str(backup_path)


def ensure_directory_exists(directory_path: str) -> bool:
    """
    Ensure a directory exists, creating it if necessary

    Returns:
        True if directory exists or was created successfully
    """
    try:
        Path(directory_path).mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        logger.error(f"Error creating directory {directory_path}: {e}")
        return False


def list_pdf_files(directory: str) -> List[str]:
    """
    List all PDF files in a directory, sorted alphabetically
    """
    dir_path = Path(directory)
    if not dir_path.is_dir():
        return []
    return sorted(str(p) for p in dir_path.glob("*.pdf") if p.is_file())
