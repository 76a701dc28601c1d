class WingBrowserError(Exception):
    """Base exception for all wingdisc_browser errors"""
    pass

class ConfigError(WingBrowserError):
    """Invalid or missing global.json"""
    pass

class DataSourceError(WingBrowserError):
    """
    A tabular source could not be loaded:
    file missing, unreadable, or missing required columns
    """
    pass

class UnknownGestureError(WingBrowserError):
    """No reducer is registered for a gesture kind"""
    pass
