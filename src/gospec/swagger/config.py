SWAGGER_VERSION = "2.0"

DEFINITION_REF_PREFIX = "#/definitions/"

# Methods a Swagger 2.0 path item can hold
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")

SERIALIZATION_CONFIG = {
    "indent": "\t",
    "sort_keys": False,
}
