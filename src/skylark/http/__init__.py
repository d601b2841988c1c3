"""HTTP collaborators — request, response, headers, and query parameters."""
