"""
Command-line interface for the vector set client.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""
