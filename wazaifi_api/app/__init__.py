"""
Application package initializer.

The service exposes a small set of JSON document collections (users,
ads, posts, notifications and reports) over HTTP.  The code is split
into ``core`` (configuration, logging, errors and the collection
store), ``schemas`` (document shapes and request bodies), ``services``
(the generic document repository and domain operations) and
``api/v1`` (FastAPI routers).
"""
