from tests.fixtures.app_client import client, settings, storage  # noqa: F401
from tests.fixtures.mocked_aws import mocked_aws, s3_client  # noqa: F401
