"""City rule files and the rule registry."""
