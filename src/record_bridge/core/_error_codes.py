# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"

_HTTP_STATUS_TO_SUBCODE = {
    400: HTTP_400,
    401: HTTP_401,
    403: HTTP_403,
    404: HTTP_404,
    500: HTTP_500,
    502: HTTP_502,
    503: HTTP_503,
}


def _http_subcode(status: int) -> str:
    return _HTTP_STATUS_TO_SUBCODE.get(status, f"http_{status}")


# Validation subcodes
VALIDATION_OPTIONS_MISSING = "validation_options_missing"
VALIDATION_TABLE_NOT_STRING = "validation_table_not_string"
VALIDATION_FIELD_LIST_INVALID = "validation_field_list_invalid"
VALIDATION_FIELD_PATH_INVALID = "validation_field_path_invalid"
VALIDATION_VALUES_NOT_MAPPING = "validation_values_not_mapping"
VALIDATION_QUERY_INVALID = "validation_query_invalid"

# Dispatch subcodes
DISPATCH_NOT_REGISTERED = "dispatch_not_registered"
DISPATCH_MALFORMED_REQUEST = "dispatch_malformed_request"

# Remote call subcodes
REMOTE_NO_STATE = "remote_no_state"
REMOTE_REJECTED = "remote_rejected"
