class PassageError(Exception):
    """Base class for failures reported to the user by the fetch command."""


class MissingContextError(PassageError):
    """No active note to read a title from, or nothing to write into."""


class MissingCredentialError(PassageError):
    """No ESV API key has been configured."""


class UpstreamError(PassageError):
    """The passage API returned an error or an unusable body."""


class SettingsError(PassageError):
    """The settings file or a setting value is invalid."""
