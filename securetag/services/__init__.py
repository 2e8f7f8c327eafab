"""
Services module
Business logic shared by the HTTP layer and the operations scripts
"""
