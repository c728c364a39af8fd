"""View commands: each renders one page of the dashboard to the console."""
