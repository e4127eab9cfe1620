#!/usr/bin/env python3
"""
Pre-commit hook that blocks database credentials from being committed.

Scans staged files for DSNs with inline passwords and hardcoded password
assignments (Python and JS config styles). Fails the commit when found.
Install: Copy to .git/hooks/pre-commit and make executable (chmod +x)
"""

import re
import sys
import subprocess
from pathlib import Path


# Values that are documented placeholders, never real secrets
PLACEHOLDERS = r'(?!change-me|changeme|password|<|\{\{|\$\{)'

SECRET_PATTERNS = [
    (
        r'(?i)\b(mysql|mariadb|postgres(?:ql)?)(\+\w+)?://[^:/\s@]+:' + PLACEHOLDERS + r'[^@\s]+@',
        'Database URL with inline password detected'
    ),
    (
        r'(?i)\b(password|passwd|pwd|db_password)\s*[:=]\s*["\']' + PLACEHOLDERS + r'[^"\']{6,}["\']',
        'Hardcoded password detected'
    ),
    (
        r'(?i)secret[_-]?key\s*[:=]\s*["\'][^"\']{16,}["\']',
        'Secret key detected'
    ),
]

# Files holding example values for documentation or tests
SKIP_FILES = ['SECURITY.md', 'DESIGN.md', 'SPEC_FULL.md']

SKIP_PATTERNS = [
    r'\.git/',
    r'\.venv/',
    r'__pycache__/',
    r'\.pyc$',
    r'\.log$',
    r'^tests/',
    r'node_modules/',
]


def get_staged_files():
    """Get list of staged files"""
    try:
        result = subprocess.run(
            ['git', 'diff', '--cached', '--name-only', '--diff-filter=ACM'],
            capture_output=True,
            text=True,
            check=True
        )
        return result.stdout.strip().split('\n') if result.stdout.strip() else []
    except subprocess.CalledProcessError:
        return []


def should_skip_file(filepath):
    """Check if file should be skipped"""
    if Path(filepath).name in SKIP_FILES:
        return True
    return any(re.search(pattern, filepath) for pattern in SKIP_PATTERNS)


def scan_text(content, filepath='<text>'):
    """Return a violation dict for every secret pattern match in `content`"""
    violations = []
    for pattern, message in SECRET_PATTERNS:
        for match in re.finditer(pattern, content, re.MULTILINE):
            violations.append({
                'file': filepath,
                'line': content[:match.start()].count('\n') + 1,
                'message': message,
                'match': match.group(0)[:50]
            })
    return violations


def scan_file(filepath):
    """Scan a file for potential secrets"""
    try:
        content = Path(filepath).read_text(encoding='utf-8', errors='ignore')
    except OSError as e:
        print(f"Warning: Could not scan {filepath}: {e}", file=sys.stderr)
        return []
    return scan_text(content, filepath)


def main():
    """Main pre-commit hook logic"""
    print("Scanning staged files for database credentials...")

    staged_files = get_staged_files()
    if not staged_files:
        print("No files to check")
        return 0

    all_violations = []

    for filepath in staged_files:
        if not Path(filepath).exists() or should_skip_file(filepath):
            continue
        all_violations.extend(scan_file(filepath))

    if all_violations:
        print("\n" + "=" * 70)
        print("SECRET LEAK DETECTED - COMMIT BLOCKED")
        print("=" * 70 + "\n")

        for v in all_violations:
            print(f"  File: {v['file']}:{v['line']}")
            print(f"  Issue: {v['message']}")
            print(f"  Match: {v['match']}...")
            print()

        print("To fix: move the value to .env (DATABASE_URL) and keep .env out of git.")
        return 1

    print("No secrets detected - commit allowed")
    return 0


if __name__ == '__main__':
    sys.exit(main())
