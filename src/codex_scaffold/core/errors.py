class ScaffoldError(Exception):
    """Base class for every failure that aborts a scaffolding run."""


class ConfigurationError(ScaffoldError):
    pass


class ParseFailure(ScaffoldError):
    def __init__(self, path: str, row: int, column: int) -> None:
        super().__init__(f"Could not parse {path}: syntax error at line {row + 1}, column {column + 1}.")
        self.path = path
        self.row = row
        self.column = column


class DeclarationNotFound(ScaffoldError):
    pass


class MalformedDeclaration(ScaffoldError):
    pass


class MissingStructuralCollection(ScaffoldError):
    def __init__(self, path: str, decorator: str, property_name: str, reason: str = "not found") -> None:
        super().__init__(f"Property '{property_name}' {reason} in the decorator @{decorator} in {path}.")
        self.path = path
        self.decorator = decorator
        self.property_name = property_name


class ModuleResolutionError(ScaffoldError):
    pass


class InvalidSelector(ScaffoldError):
    pass


class FileConflict(ScaffoldError):
    def __init__(self, path: str) -> None:
        super().__init__(f"{path} already exists.")
        self.path = path
