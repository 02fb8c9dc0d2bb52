"""Server-rendered pages.

Documents carry no per-request data: the home page and the admin console fetch
categories and sites from `/data` in the browser.
"""
