# api/middleware/security_headers.py


def add_security_headers(response):
    """Add security headers to all responses"""
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
    response.headers['Referrer-Policy'] = 'no-referrer'
    response.headers['Content-Security-Policy'] = "default-src 'self'"
    response.headers['Cross-Origin-Resource-Policy'] = 'same-origin'
    return response


def init_app(app):
    app.after_request(add_security_headers)
