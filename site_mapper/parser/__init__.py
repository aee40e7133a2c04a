"""site_mapper.parser: HTML parsing collaborator."""
