"""Input validation helpers with XSS protection for catalog text fields"""

import re
import bleach

# Allowed HTML tags in long-form text (bio, description)
ALLOWED_TAGS = ['b', 'i', 'u', 'em', 'strong', 'p', 'br']

DANGEROUS_PATTERNS = [
    r'<script[^>]*>',
    r'javascript:',
    r'on\w+\s*=',
    r'<iframe',
]


class SafeStringMixin:
    """Mixin for XSS-safe string validation"""

    @staticmethod
    def sanitize_html(value: str) -> str:
        """Remove dangerous HTML/JavaScript"""
        if not value:
            return value
        return bleach.clean(value, tags=ALLOWED_TAGS, strip=True)

    @staticmethod
    def validate_no_script(value: str) -> str:
        """Block common XSS patterns"""
        if not value:
            return value

        for pattern in DANGEROUS_PATTERNS:
            if re.search(pattern, value, re.IGNORECASE):
                raise ValueError("Invalid characters detected")

        return value

    @staticmethod
    def validate_url(value):
        """Accept empty values and http(s) links only"""
        if value is None:
            return value
        value = value.strip()
        if not value:
            return None
        if not re.match(r'^https?://', value, re.IGNORECASE):
            raise ValueError("URL must start with http:// or https://")
        return value


def strip_required(value: str) -> str:
    """Trim a required text field and reject blank input"""
    value = value.strip()
    if not value:
        raise ValueError("Field cannot be blank")
    return value
