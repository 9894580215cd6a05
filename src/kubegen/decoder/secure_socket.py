"""Secret extraction from secured transport configuration.

A secured endpoint declares ``keyStore`` and ``trustStore`` blocks, each
with a ``filePath``. Both files are read, base64 encoded and mounted into
the container at their parent directory. ``${ballerina.home}`` means two
different things here: the local runtime home when the file is read, and
the in-container runtime home when the mount path is computed.
"""

import base64
import logging
from pathlib import Path, PurePosixPath
from typing import List, Optional

from kubegen.constants import BALLERINA_HOME_PLACEHOLDER
from kubegen.decoder.source import ConfigSource, as_text, iter_pairs
from kubegen.decoder.values import normalize_name, resolve_value
from kubegen.errors import ArtifactIOError, EnvironmentVariableError
from kubegen.models.config import GeneratorConfig
from kubegen.models.volume import SecretModel
from kubegen.utils.files import read_file_content


logger = logging.getLogger(__name__)

KEY_STORE = "keyStore"
TRUST_STORE = "trustStore"
FILE_PATH = "filePath"


def resolve_local_path(file_path: str, config: GeneratorConfig) -> Path:
    """Resolve a path for reading on the local machine."""
    if BALLERINA_HOME_PLACEHOLDER in file_path:
        if not config.ballerina_home:
            raise EnvironmentVariableError(
                f"error resolving {file_path}: ballerina.home is not configured (set BALLERINA_HOME)"
            )
        file_path = file_path.replace(BALLERINA_HOME_PLACEHOLDER, config.ballerina_home)
    return Path(file_path)


def resolve_mount_path(file_path: str, config: GeneratorConfig) -> str:
    """Return the in-container directory a file is mounted under."""
    if BALLERINA_HOME_PLACEHOLDER in file_path:
        file_path = file_path.replace(BALLERINA_HOME_PLACEHOLDER, config.container_ballerina_home)
    return str(PurePosixPath(file_path).parent)


def read_secret_file(file_path: str, config: GeneratorConfig) -> str:
    """Read a file and return its base64 encoded content."""
    content = read_file_content(resolve_local_path(file_path, config))
    return base64.b64encode(content).decode("ascii")


def read_config_map_file(file_path: str, config: GeneratorConfig) -> str:
    """Read a file as UTF-8 text."""
    path = resolve_local_path(file_path, config)
    try:
        return read_file_content(path).decode("utf-8")
    except UnicodeDecodeError as e:
        raise ArtifactIOError(f"File {path} is not valid UTF-8 text") from e


def data_key(file_path: str) -> str:
    """Key a data entry by the file's name."""
    return PurePosixPath(file_path).name


def extract_file_path(source: ConfigSource) -> Optional[str]:
    """Return the ``filePath`` of a key/trust store block, if any."""
    for key, value in iter_pairs(source):
        if key == FILE_PATH:
            return resolve_value(as_text(key, value))
    return None


def process_secure_socket(
    endpoint_name: str,
    source: ConfigSource,
    config: GeneratorConfig,
) -> List[SecretModel]:
    """Build secret models for an endpoint's key and trust stores."""
    key_store_file = None
    trust_store_file = None
    for key, value in iter_pairs(source):
        if key == KEY_STORE:
            key_store_file = extract_file_path(value)
        elif key == TRUST_STORE:
            trust_store_file = extract_file_path(value)

    base_name = normalize_name(endpoint_name)

    if key_store_file and trust_store_file:
        key_mount = resolve_mount_path(key_store_file, config)
        if key_mount == resolve_mount_path(trust_store_file, config):
            logger.debug(f"Key and trust stores of {endpoint_name} share {key_mount}")
            return [
                SecretModel(
                    name=f"{base_name}-secure-socket",
                    mount_path=key_mount,
                    data={
                        data_key(key_store_file): read_secret_file(key_store_file, config),
                        data_key(trust_store_file): read_secret_file(trust_store_file, config),
                    },
                )
            ]

    secrets = []
    for suffix, store_file in (("keystore", key_store_file), ("truststore", trust_store_file)):
        if not store_file:
            continue
        secrets.append(
            SecretModel(
                name=f"{base_name}-{suffix}",
                mount_path=resolve_mount_path(store_file, config),
                data={data_key(store_file): read_secret_file(store_file, config)},
            )
        )
    return secrets
