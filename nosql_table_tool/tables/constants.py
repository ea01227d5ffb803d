"""
Constants for table operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

# Local simulator endpoint (DynamoDB Local)
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8000
DEFAULT_TENANT_ID = "mytenantId"

# Region used for request signing against the local endpoint
LOCAL_REGION = "us-east-1"

# Table wait behavior (milliseconds)
DEFAULT_WAIT_TIMEOUT_MS = 60000  # 60 seconds
DEFAULT_POLL_INTERVAL_MS = 1000  # 1 second

# Raw DynamoDB table status strings
STATUS_CREATING = "CREATING"
STATUS_UPDATING = "UPDATING"
STATUS_ACTIVE = "ACTIVE"
STATUS_DELETING = "DELETING"

# Example tables
DELETE_EXAMPLE_TABLE = "userAddress"
INDEX_EXAMPLE_TABLE = "usersInfo"
INDEX_EXAMPLE_INDEX = "idx1"
DROP_EXAMPLE_TABLE = "ittage"
