"""Case helpers shared by selectors, class names, file names and templates."""

import re

_DECAMELIZE_RE = re.compile(r"([a-z\d])([A-Z])")
_DASHERIZE_RE = re.compile(r"[ _]")
_CAMELIZE_RE = re.compile(r"(-|_|\.|\s)+(.)?")
_UNDERSCORE_WORDS_RE = re.compile(r"([a-z\d])([A-Z]+)")
_UNDERSCORE_SEPARATORS_RE = re.compile(r"-|\s+")


def decamelize(value: str) -> str:
    """``innerHTML`` -> ``inner_html``"""
    return _DECAMELIZE_RE.sub(r"\1_\2", value).lower()


def dasherize(value: str) -> str:
    """``innerHTML`` -> ``inner-html``"""
    return _DASHERIZE_RE.sub("-", decamelize(value))


def camelize(value: str) -> str:
    """``app-foo`` -> ``appFoo``"""

    def _upper(match: re.Match[str]) -> str:
        char = match.group(2)
        return char.upper() if char else ""

    camelized = _CAMELIZE_RE.sub(_upper, value)
    return camelized[:1].lower() + camelized[1:]


def capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def classify(value: str) -> str:
    """``foo-bar`` -> ``FooBar``"""
    return ".".join(capitalize(camelize(part)) for part in value.split("."))


def underscore(value: str) -> str:
    return _UNDERSCORE_SEPARATORS_RE.sub("_", _UNDERSCORE_WORDS_RE.sub(r"\1_\2", value)).lower()
