"""Classification and aggregation engine for the Gerrit patch dashboard."""
