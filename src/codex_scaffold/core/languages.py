from pathlib import PurePosixPath

_LANGUAGE_ALIASES = {
    "ts": "typescript",
    "typescript": "typescript",
    "tsx": "tsx",
}

_EXTENSION_LANGUAGE_MAP = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# tsx shares the typescript node names, so both load the same query files.
_QUERY_FAMILY = {
    "typescript": "typescript",
    "tsx": "typescript",
}

_SUPPORTED_LANGUAGES = set(_QUERY_FAMILY)


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{language}'. Supported: {sorted(_SUPPORTED_LANGUAGES)}")
    return resolved


def detect_language_from_path(file_path: PurePosixPath) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def resolve_language(language: str | None, path: str | None) -> str:
    if language:
        return normalize_language(language)
    if path:
        return detect_language_from_path(PurePosixPath(path))
    raise ValueError("Language must be provided when no file path is available.")


def query_family(language: str) -> str:
    return _QUERY_FAMILY[normalize_language(language)]
