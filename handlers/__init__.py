"""
handlers/ - Presentation Layer
================================
Console and desktop front-ends. Each one collects raw text from the user,
delegates to RecordService, and renders the result or the error message.
No business logic lives here.
"""
