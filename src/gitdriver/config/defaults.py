"""Starter gitdriver.toml template."""

DEFAULT_TOML = """\
# gitdriver configuration
version = "1.0"

[git]
binary = "git"
# base_dir = "/srv/workspaces"   # working directories must stay inside this root
sign_commits = false
# default_branch = "main"        # unset = git's own init.defaultBranch

[execution]
timeout = 60                     # seconds, local operations
network_timeout = 300            # seconds, clone / fetch / pull / push
max_output_bytes = 10485760
diff_max_output_bytes = 20971520

[protection]
enforce = true
protected_branches = ["main", "master", "production", "prod", "develop", "dev"]

[logging]
level = "warning"                # debug | info | warning | error | critical
format = "text"                  # text | json

[provider]
serverless = false
# custom_error_patterns = "error-patterns.yaml"
"""
