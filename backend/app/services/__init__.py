# Services package init
"""
Writing Submissions Backend — Services Layer
=============================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive a session and the caller's identity per call, query,
       and return schema objects or raise application exceptions.

Service Inventory:
    - SubmissionService: owner-scoped reads of writing submissions
"""
