"""Common mock API responses: health check, errors."""

HEALTH_CHECK_RESPONSE = {
    "result": {
        "reports": [
            {
                "code": "health-chk",
                "report_type": "SELLER_PRODUCTS",
                "status": "success",
            }
        ],
        "total": 42,
    }
}

ERROR_AUTH_403 = {
    "code": 7,
    "message": "Invalid Api-Key, please contact support",
    "details": [],
}

ERROR_BAD_REQUEST_400 = {
    "code": 3,
    "message": "invalid request payload",
    "details": [
        {"typeUrl": "type.googleapis.com/google.rpc.BadRequest", "value": "page_size"}
    ],
}
