"""Internal constants shared across the library."""

USER_AGENT = "pybpi/0.1"
DEFAULT_SCHEME = "http"

#: Key id of the token resource the BPI UI requests.
DEFAULT_TOKEN_RESOURCE_ID = "54bb2165-71e1-41a6-af3e-7da4a0e1e2c1"

TOKEN_ENDPOINT = "/v1/users/token/{resource_id}"
