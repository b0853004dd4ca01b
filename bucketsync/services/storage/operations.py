"""
S3 primitive operations.

Implements :class:`StorageTransport` on a boto3 S3 client. Uploads use
a single ``PutObject`` request so the resulting ETag equals the MD5 of
the content, which the reconciler compares against local digests.
"""
from typing import Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ...exceptions import StorageError
from ...models.inventory import ListPage, RemoteObject
from ...utils.headers import to_put_object_args
from ...utils.logger import get_logger
from .base import MAX_KEYS_PER_PAGE, StorageTransport

log = get_logger(__name__)

_TRANSPORT_ERRORS = (BotoCoreError, ClientError, OSError)


class S3Operations(StorageTransport):
    """Primitive S3 operations on one bucket.

    Args:
        s3_client: botocore S3 client (see ``create_storage_client``)
        bucket_name: Bucket every operation targets
    """

    def __init__(self, s3_client, bucket_name):
        self.s3_client = s3_client
        self.bucket_name = bucket_name

    def list_objects(self, prefix: str, continuation_token: Optional[str] = None,
                     max_keys: int = MAX_KEYS_PER_PAGE) -> ListPage:
        """List one page of objects under *prefix*.

        Args:
            prefix: S3 key prefix
            continuation_token: Token returned by the previous page
            max_keys: Maximum entries in the page

        Returns:
            ListPage of the objects and the next continuation token
        """
        params = {
            'Bucket': self.bucket_name,
            'Prefix': prefix,
            'MaxKeys': max_keys,
        }
        if continuation_token:
            params['ContinuationToken'] = continuation_token

        try:
            response = self.s3_client.list_objects_v2(**params)
        except _TRANSPORT_ERRORS as e:
            raise StorageError(f"Failed to list s3://{self.bucket_name}/{prefix}: {e}") from e

        objects = [
            RemoteObject(obj['Key'], obj.get('ETag', ''))
            for obj in response.get('Contents', [])
        ]
        next_token = response.get('NextContinuationToken') if response.get('IsTruncated') else None
        log.debug("Listed %d object(s) under %r (more: %s)", len(objects), prefix, bool(next_token))
        return ListPage(objects, next_token)

    def put_object(self, key: str, local_path: str, headers: Dict[str, str]) -> None:
        """Upload file to S3.

        Args:
            key: S3 object key
            local_path: Local file path
            headers: HTTP headers translated into PutObject parameters
        """
        extra_args = to_put_object_args(headers, key)
        try:
            with open(local_path, 'rb') as body:
                self.s3_client.put_object(
                    Bucket=self.bucket_name,
                    Key=key,
                    Body=body,
                    **extra_args
                )
        except _TRANSPORT_ERRORS as e:
            raise StorageError(f"Failed to upload {local_path} to s3://{self.bucket_name}/{key}: {e}") from e

    def delete_object(self, key: str) -> None:
        """Delete one object.

        Args:
            key: S3 object key
        """
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except _TRANSPORT_ERRORS as e:
            raise StorageError(f"Failed to delete s3://{self.bucket_name}/{key}: {e}") from e
