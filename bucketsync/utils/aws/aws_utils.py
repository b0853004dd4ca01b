"""Storage client utilities.

Builds the boto3 S3 client used by :class:`S3Operations` from a
:class:`SyncConfig`. Any S3-compatible service (AWS S3, Aliyun OSS,
MinIO) is reachable through the ``endpoint`` setting.
"""
from typing import Optional

from ...models.sync_config import SyncConfig
from ..logger import get_logger

log = get_logger(__name__)


def _import_boto3():
    """Lazily import boto3, raising a helpful error if not installed."""
    try:
        import boto3
        return boto3
    except ImportError:
        log.error("boto3 is required for bucket access but is not installed.")
        log.error("Install it with: pip install bucketsync")
        raise


def normalize_endpoint(endpoint: str) -> Optional[str]:
    """Return *endpoint* as a URL, adding ``https://`` when no scheme is given.

    Example:
        >>> normalize_endpoint("oss-cn-hangzhou.aliyuncs.com")
        'https://oss-cn-hangzhou.aliyuncs.com'
        >>> normalize_endpoint("")
    """
    endpoint = (endpoint or "").strip()
    if not endpoint:
        return None
    if "://" not in endpoint:
        endpoint = f"https://{endpoint}"
    return endpoint


def create_storage_client(config: SyncConfig):
    """Create the S3 client for *config*.

    The connection pool is sized to ``max_concurrency`` so concurrent
    transfers do not queue on the pool. Virtual-hosted addressing is
    used, which OSS requires. Checksums are only sent where an operation
    requires them, so uploads go out as plain single-part bodies rather
    than aws-chunked streams with a checksum trailer.

    Args:
        config: Run configuration

    Returns:
        botocore S3 client

    Example:
        >>> client = create_storage_client(config)
        >>> client.list_objects_v2(Bucket=config.bucket, MaxKeys=1)
    """
    boto3 = _import_boto3()
    from botocore.config import Config

    session = boto3.session.Session(
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.access_key_secret,
        aws_session_token=config.security_token or None,
        region_name=config.region or None,
    )
    client_config = Config(
        max_pool_connections=max(10, config.max_concurrency),
        s3={"addressing_style": "virtual"},
        retries={"max_attempts": 1, "mode": "standard"},
        request_checksum_calculation="when_required",
        response_checksum_validation="when_required",
    )
    endpoint_url = normalize_endpoint(config.endpoint)
    log.debug("Creating S3 client for bucket %s at %s", config.bucket, endpoint_url or "default endpoint")
    return session.client("s3", endpoint_url=endpoint_url, config=client_config)
