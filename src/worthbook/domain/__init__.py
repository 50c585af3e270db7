"""Domain contracts shared by the record stores."""
