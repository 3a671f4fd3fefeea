class ExplorerError(Exception):
    """Base exception for all csv_explorer errors"""
    pass

class ConfigError(ExplorerError):
    """Invalid or inconsistent global.json"""
    pass

class FetchError(ExplorerError):
    """
    The dataset source could not be reached or read
    (missing file, refused connection, non-2xx HTTP status)
    """
    pass

class ParseError(ExplorerError):
    """
    The dataset source was fetched but is not usable CSV.
    The whole load is discarded, partial rows are never admitted.
    """
    pass

class PersistenceReadError(ExplorerError):
    """
    Stored view state is missing or corrupt. Always recovered by the
    view-state store; never reaches the UI.
    """
    pass
