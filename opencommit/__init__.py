"""
opencommit

Generate a commit message from your git changes and copy it to the clipboard.
"""

__version__ = "1.0.0"

# Conventional commit types, shared by the prompt builder and reply validation
COMMIT_TYPES = {
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
    'refactor': 'Code restructuring without behavior change',
    'chore': 'Maintenance tasks, dependencies, tooling',
    'docs': 'Documentation only changes',
    'test': 'Adding or updating tests',
    'style': 'Formatting, whitespace, no code change',
    'perf': 'Performance improvement',
    'ci': 'CI/CD configuration changes',
    'build': 'Build system or external dependency changes',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())
