#!/usr/bin/env python3
"""Check for banned Python constructions in kubefuzzy source.

Banned constructions:

    Construction          Reason                               Use instead
    --------------------  -----------------------------------  ---------------------------
    import shlex          bashlex splits config commands,      core.bash.split_command
    from shlex import     core.bash quotes selector commands   core.bash.bash_quote/join
    os.system(...)        external commands run from argv      subprocess with a list
    shell=True            only the selector runs shell strings subprocess with a list
"""

import ast
import os
import sys

BANNED_MODULES = frozenset({"shlex"})


def find_python_files(directory):
    """Find all .py files recursively."""
    result = []
    for root, dirs, files in os.walk(directory):
        dirs[:] = [d for d in dirs if d != "__pycache__"]
        for f in files:
            if f.endswith(".py"):
                result.append(os.path.join(root, f))
    result.sort()
    return result


def check_file(filepath):
    with open(filepath) as f:
        source = f.read()

    tree = ast.parse(source, filepath)
    errors = []

    for node in ast.walk(tree):
        lineno = getattr(node, "lineno", 0)

        # import shlex
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name in BANNED_MODULES:
                    errors.append(
                        (lineno, f"import {alias.name}: banned, use kubefuzzy.core.bash")
                    )

        # from shlex import ...
        if isinstance(node, ast.ImportFrom):
            if node.module in BANNED_MODULES:
                errors.append(
                    (lineno, f"from {node.module} import: banned, use kubefuzzy.core.bash")
                )

        if isinstance(node, ast.Call):
            # os.system(...)
            func = node.func
            if (
                isinstance(func, ast.Attribute)
                and func.attr == "system"
                and isinstance(func.value, ast.Name)
                and func.value.id == "os"
            ):
                errors.append((lineno, "os.system: banned, use subprocess with an argv list"))

            # subprocess.*(..., shell=True)
            for keyword in node.keywords:
                if (
                    keyword.arg == "shell"
                    and isinstance(keyword.value, ast.Constant)
                    and keyword.value.value is True
                ):
                    errors.append((lineno, "shell=True: banned, pass an argv list"))

    return errors


def main():
    src_dir = "src"
    if len(sys.argv) > 1:
        src_dir = sys.argv[1]

    if not os.path.isdir(src_dir):
        print(f"Directory not found: {src_dir}")
        sys.exit(1)

    files = find_python_files(src_dir)
    if not files:
        print(f"No Python files found in: {src_dir}")
        sys.exit(1)

    all_errors = []
    for filepath in files:
        try:
            errors = check_file(filepath)
            for lineno, description in errors:
                all_errors.append((filepath, lineno, description))
        except SyntaxError as e:
            print(f"Syntax error in {filepath}: {e}")
            sys.exit(1)

    if not all_errors:
        sys.exit(0)

    print(f"Found {len(all_errors)} banned construction(s):")
    for filepath, lineno, description in sorted(all_errors):
        print(f"  {filepath}:{lineno}: {description}")
    sys.exit(1)


if __name__ == "__main__":
    main()
