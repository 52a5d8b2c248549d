"""
Service layer.

``DocumentService`` is the generic repository; ``UserService``,
``LikeService`` and ``ReportService`` add the rules that span several
documents or collections.  Services hold no state of their own; all
persisted state is owned by the ``CollectionStore`` they are given.
"""
