"""Resolution of dates and @-mentions to notes."""
