"""Models package: domain records, ORM tables and DTOs."""
