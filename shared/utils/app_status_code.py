class AppStatusCode:
    OPERATION_FAILED = "200"
    INVALID_INPUT = "201"
    REQUIRED_VALIDATION_ERROR = "202"

    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_UNAUTHORIZED_ACCESS = "301"
    WEBHOOK_SIGNATURE_INVALID = "302"

    CONFIGURATION_ERROR = "400"
