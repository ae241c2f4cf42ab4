#!/usr/bin/env python3
"""
Skill Builder - File templates for new skills.

Each generator returns file content (text, or a dict for JSON files). A
freshly generated tree passes ``validate_skill`` with no errors or warnings.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import yaml
from skb_validation_common import CLI_ENTRY_POINT, MODULE_TYPE

# Templates choosable with `create --template`
TEMPLATES = ("basic", "advanced", "analyzer")

# Templates that also get src/analyzer/index.js
ANALYZER_TEMPLATES = {"advanced", "analyzer"}

DEPENDENCIES = {
    "picocolors": "^1.1.1",
    "yargs": "^17.7.2",
}

DEV_DEPENDENCIES = {
    "@types/bun": "latest",
    "@types/node": "^20.11.0",
    "@types/yargs": "^17.0.32",
    "bun-types": "latest",
}


def humanize(name: str) -> str:
    """my-new-skill -> my new skill"""
    return name.replace("-", " ")


def generate_package_json(name: str, with_analyzer: bool = False) -> dict[str, Any]:
    scripts = {
        "build": "bun build src/cli/index.js --outdir dist/cli --target node --platform neutral",
    }
    if with_analyzer:
        scripts["build:analyzer"] = (
            "bun build src/analyzer/index.js --outdir dist/analyzer --target node --platform neutral"
        )
        scripts["build:all"] = "bun run build && bun run build:analyzer"
    scripts["dev"] = "bun run src/cli/index.js"

    return {
        "name": name,
        "version": "1.0.0",
        "description": f"A Claude skill for {humanize(name)}",
        "type": MODULE_TYPE,
        "main": CLI_ENTRY_POINT,
        "bin": {name: CLI_ENTRY_POINT},
        "scripts": scripts,
        "keywords": ["claude", "skill", name],
        "author": "",
        "license": "MIT",
        "dependencies": dict(DEPENDENCIES),
        "devDependencies": dict(DEV_DEPENDENCIES),
    }


def generate_polyglot_json(name: str, class_name: str) -> dict[str, dict[str, str]]:
    return {
        "skill_name": {"": class_name, "zh": ""},
        "skill_description": {"": f"A Claude skill for {humanize(name)}", "zh": ""},
        "help_description": {"": f"Use this skill to {humanize(name)}", "zh": ""},
        "command_help": {"": "Show help information", "zh": "显示帮助信息"},
        "command_version": {"": "Show version information", "zh": "显示版本信息"},
        "success_message": {"": "Operation completed successfully", "zh": "操作成功完成"},
        "error_message": {"": "An error occurred", "zh": "发生错误"},
    }


def generate_skill_md(name: str, class_name: str) -> str:
    return f"""---
name: {name}
description: Use this skill when you need to {humanize(name)}.
license: MIT
---

# {class_name}

## When to use

Use this skill when the user asks to {humanize(name)}.

## Usage

```bash
{name} hello World
{name} --help
```

## Resources

- `polyglot.json` holds user-facing strings (empty-string locale is the default)
- `{CLI_ENTRY_POINT}` is the built CLI entry point
"""


CLI_TEMPLATE = """#!/usr/bin/env node
import fs from 'fs';
import yargs from 'yargs';
import { hideBin } from 'yargs/helpers';
import { fileURLToPath } from 'url';
import { dirname, join } from 'path';

const __dirname = dirname(fileURLToPath(import.meta.url));

// Load translations from polyglot.json at the skill root
function loadTranslations() {
  const polyglotPath = join(__dirname, '../../polyglot.json');
  try {
    if (fs.existsSync(polyglotPath)) {
      return JSON.parse(fs.readFileSync(polyglotPath, 'utf-8'));
    }
  } catch (e) {
    console.warn('Failed to load translations:', e.message);
  }
  return {};
}

const translations = loadTranslations();
const t = (key, defaultValue = key) => translations[key]?.[''] || defaultValue;

const argv = yargs(hideBin(process.argv))
  .scriptName('__NAME__')
  .usage('Usage: $0 <command> [options]')
  .command('hello [name]', 'Say hello to someone', (yargs) => {
    return yargs.positional('name', {
      describe: 'Name to greet',
      type: 'string',
      default: 'World'
    });
  }, async (argv) => {
    console.log(`Hello, ${argv.name}!`);
    console.log(t('success_message', 'Success!'));
  })
  .help()
  .alias('help', 'h')
  .version('1.0.0')
  .alias('version', 'v')
  .example('$0 hello Claude', 'Say hello to Claude')
  .argv;

export { argv };
"""


def generate_cli(name: str) -> str:
    return CLI_TEMPLATE.replace("__NAME__", name)


ANALYZER_TEMPLATE = """/**
 * __NAME__ Analyzer
 *
 * Analyzes input and generates structured data for visualization
 */

import fs from 'fs';
import path from 'path';

export async function analyze(input, options = {}) {
  return {
    input,
    options,
    timestamp: new Date().toISOString(),
    analysis: {}
  };
}

export async function analyzeFile(filePath) {
  if (!fs.existsSync(filePath)) {
    throw new Error(`File not found: ${filePath}`);
  }
  const content = fs.readFileSync(filePath, 'utf-8');
  return analyze(content, { source: filePath });
}

export async function analyzeDirectory(dirPath) {
  if (!fs.existsSync(dirPath)) {
    throw new Error(`Directory not found: ${dirPath}`);
  }

  const results = {
    type: 'directory',
    path: dirPath,
    files: [],
    timestamp: new Date().toISOString()
  };

  for (const entry of fs.readdirSync(dirPath, { withFileTypes: true })) {
    if (!entry.isFile()) continue;
    const filePath = path.join(dirPath, entry.name);
    try {
      results.files.push({ name: entry.name, analysis: await analyzeFile(filePath) });
    } catch (e) {
      results.files.push({ name: entry.name, error: e.message });
    }
  }

  return results;
}
"""


def generate_analyzer(name: str) -> str:
    return ANALYZER_TEMPLATE.replace("__NAME__", name)


def generate_readme(name: str, class_name: str) -> str:
    return f"""# {class_name}

A Claude skill for {humanize(name)}.

## Usage

```bash
{name} --help
```

## Commands

| Command | Description |
|---------|-------------|
| `hello [name]` | Say hello to someone |

## Development

```bash
# Install dependencies
bun install

# Build the skill
bun run build

# Run in development mode
bun run dev
```

## Structure

```
{name}/
├── SKILL.md              # Skill definition (frontmatter + instructions)
├── src/cli/index.js      # CLI entry point
├── dist/                 # Built files
├── locales/              # Additional translations
├── polyglot.json         # Internationalization
├── package.json
├── .skill.yml            # Skill configuration
└── README.md
```

## License

MIT
"""


def generate_gitignore() -> str:
    return """# Dependencies
node_modules/

# Build output
dist/

# Environment
.env
.env.local

# IDE
.vscode/
.idea/
*.swp

# OS
.DS_Store
Thumbs.db

# Logs
*.log
"""


def generate_skill_yml(name: str) -> str:
    config = {
        "name": name,
        "version": "1.0.0",
        "description": f"A Claude skill for {humanize(name)}",
        "settings": {
            "output_format": "text",
            "verbose": False,
            "language": "en",
        },
        "commands": [
            {
                "name": "hello",
                "description": "Say hello to someone",
                "arguments": [
                    {"name": "name", "description": "Name to greet", "required": False, "default": "World"},
                ],
            }
        ],
        "triggers": [{"pattern": name, "description": f"User mentions {name}"}],
    }
    body = yaml.safe_dump(config, sort_keys=False, allow_unicode=True)
    return "# Claude Skill Configuration\n" + body


def generate_license(name: str, year: int | None = None) -> str:
    year = year or datetime.now(timezone.utc).year
    return f"""MIT License

Copyright (c) {year} {name} contributors

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""


def generate_bunfig() -> str:
    return """[install]
# Always use exact versions in package.json
exact = true

# Install devDependencies too
dev = true

[install.cache]
enable = true
"""
