"""Download URL construction for artifact builds.

Pure string templating: no network access, same input gives the same URLs.
"""

from ..constants import DEFAULT_BASE_URL, PLATFORM_ARCHIVES, PLATFORM_BUILD_DIRS
from ..errors import UnknownPlatformError
from ..models import ArtifactDownloadUrls, Platform, VersionDescriptor


def resolve_platform(platform: Platform | str) -> Platform:
    """Return the Platform for a token, failing fast on anything unknown.

    Raises:
        UnknownPlatformError: If the platform is not recognized
    """
    try:
        return Platform(platform)
    except ValueError:
        raise UnknownPlatformError(f"Unknown platform: {platform!r}") from None


def build_artifact_url(
    version: VersionDescriptor,
    platform: Platform | str,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """Return the build directory URL for a version on a platform.

    Args:
        version: Parsed version
        platform: Target platform
        base_url: Artifact host root

    Returns:
        Directory URL, ``{base}/{build_dir}/{version}-{sha}``

    Raises:
        UnknownPlatformError: If the platform is not recognized
    """
    token = resolve_platform(platform).value
    build_id = f"{version.raw}-{version.source_sha}" if version.source_sha else version.raw
    return f"{base_url.rstrip('/')}/{PLATFORM_BUILD_DIRS[token]}/{build_id}"


def build_download_urls(
    version: VersionDescriptor,
    platform: Platform | str,
    base_url: str = DEFAULT_BASE_URL,
) -> ArtifactDownloadUrls:
    """Build archive download URLs for a version on a platform.

    Raises:
        UnknownPlatformError: If the platform is not recognized
    """
    artifact_url = build_artifact_url(version, platform, base_url)
    zip_name, seven_zip_name = PLATFORM_ARCHIVES[resolve_platform(platform).value]
    return ArtifactDownloadUrls(
        zip=f"{artifact_url}/{zip_name}",
        seven_zip=f"{artifact_url}/{seven_zip_name}",
    )
