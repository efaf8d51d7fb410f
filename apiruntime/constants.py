"""HTTP header names and media types shared by the runtime."""

HEADER_CONTENT_TYPE = "Content-Type"
"""The content-type header; its value is a media type."""

HEADER_TRANSFER_ENCODING = "Transfer-Encoding"
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"

CHARSET_KEY = "charset"

DEFAULT_MIME = "application/octet-stream"
JSON_MIME = "application/json"
YAML_MIME = "application/x-yaml"
XML_MIME = "application/xml"
TEXT_MIME = "text/plain"
HTML_MIME = "text/html"
CSV_MIME = "text/csv"
MULTIPART_FORM_MIME = "multipart/form-data"
URLENCODED_FORM_MIME = "application/x-www-form-urlencoded"