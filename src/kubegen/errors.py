"""Exceptions raised while generating artifacts."""


class KubernetesPluginError(Exception):
    """Base error for artifact generation failures."""
    pass


class ConfigError(KubernetesPluginError):
    """Unrecognized configuration key, malformed value or broken reference."""
    pass


class EnvironmentVariableError(KubernetesPluginError):
    """Referenced environment variable is not set."""
    pass


class ArtifactIOError(KubernetesPluginError):
    """File read, write or copy failure."""
    pass


class ProcessError(KubernetesPluginError):
    """Docker build or push exited non-zero or was interrupted."""
    pass
