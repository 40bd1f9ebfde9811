"""TalentFlow core infrastructure: configuration, logging, database, ids."""
