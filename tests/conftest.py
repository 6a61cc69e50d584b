"""Common test setup."""

from tests.mock_utils import patch_mockfirestore

patch_mockfirestore()
