"""Shared pytest fixtures for the extpage test suite.

Provides reusable fixtures for:
- A miniature three-variant extension template on disk
- The raw text of each file the rewriters own
- The default variant registry and its variants
- A generator config pointing at the template
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any

import pytest

from extpage.config import GeneratorConfig
from extpage.variants import Variant, VariantRegistry, default_registry


# ---------------------------------------------------------------------------
# Template file contents
# ---------------------------------------------------------------------------

MANIFEST: dict[str, Any] = {
    "manifest_version": 3,
    "name": "Extension Template",
    "version": "1.0.0",
    "permissions": ["storage", "history", "bookmarks", "favicon"],
    "chrome_url_overrides": {"newtab": "newtab.html"},
    "action": {"default_popup": "popup.html"},
}

PACKAGE: dict[str, Any] = {
    "name": "extension-template",
    "version": "1.0.0",
    "private": True,
    "type": "module",
    "bin": {"create-extension": "scripts/create.js"},
    "scripts": {"dev": "node scripts/dev.js", "build": "vite build"},
    "dependencies": {"react": "^19.0.0"},
}

LOCKFILE: dict[str, Any] = {
    "name": "extension-template",
    "version": "1.0.0",
    "lockfileVersion": 3,
    "requires": True,
    "packages": {
        "": {"name": "extension-template", "version": "1.0.0"},
        "node_modules/react": {"version": "19.0.0"},
    },
}

VITE_CONFIG = textwrap.dedent("""\
    import { defineConfig } from 'vite';
    import react from '@vitejs/plugin-react';
    import { resolve } from 'path';

    export default defineConfig({
      plugins: [react()],
      build: {
        rollupOptions: {
          input: {
            newtab: resolve(__dirname, 'src/newtab.html'),
            history: resolve(__dirname, 'src/history.html'),
            bookmarks: resolve(__dirname, 'src/bookmarks.html'),
            popup: resolve(__dirname, 'src/popup.html'),
          },
        },
      },
    });
""")

STYLESHEET = textwrap.dedent("""\
    @tailwind base;
    @tailwind components;
    @tailwind utilities;

    /* 全局基础样式 */
    body {
      margin: 0;
      font-family: system-ui, sans-serif;
    }

    /* NewTab 特定全局样式 */
    body.newtab {
      min-height: 100vh;
    }

    /* History 特定全局样式 */
    body.history {
      min-width: 800px;
    }

    /* Bookmarks 特定全局样式 */
    body.bookmarks {
      min-width: 720px;
    }

    /* 亮色主题背景渐变 */
    body.newtab {
      background: linear-gradient(135deg, #f5f7fa 0%, #c3cfe2 100%);
    }

    /* 暗色主题背景渐变 */
    .dark body.newtab {
      background: linear-gradient(135deg, #1f2937 0%, #111827 100%);
    }

    /* 亮色主题背景渐变 */
    body.history {
      background: #f8fafc;
    }

    /* 暗色主题背景渐变 */
    .dark body.history {
      background: #0f172a;
    }

    /* 亮色主题背景渐变 */
    body.bookmarks {
      background: #fefce8;
    }

    /* 暗色主题背景渐变 */
    .dark body.bookmarks {
      background: #1c1917;
    }

    /* 滚动条 */
    ::-webkit-scrollbar {
      width: 8px;
    }
""")

README = textwrap.dedent("""\
    # Chrome Extension Template

    基于 React + Vite 的浏览器扩展模板。

    ## 功能

    ### 页面覆盖

    项目内置 3 个页面：

    - `newtab`：新标签页
    - `history`：历史记录页
    - `bookmarks`：书签页

    ### 弹出窗口

    - `popup`：扩展弹窗

    ## 开发

    ```bash
    # 安装依赖
    npm install
    npm run dev
    ```
""")

PAGE_FILES: dict[str, str] = {
    "src/newtab.html": "<div id=\"root\"></div><!-- newtab -->\n",
    "src/history.html": "<div id=\"root\"></div><!-- history -->\n",
    "src/bookmarks.html": "<div id=\"root\"></div><!-- bookmarks -->\n",
    "src/popup.html": "<div id=\"root\"></div><!-- popup -->\n",
    "src/newtab/index.tsx": "export const page = 'newtab';\n",
    "src/history/index.tsx": "export const page = 'history';\n",
    "src/bookmarks/index.tsx": "export const page = 'bookmarks';\n",
    "src/popup/index.tsx": "export const page = 'popup';\n",
    "src/components/NewTabContent/index.tsx": "export default function NewTabContent() {}\n",
    "src/components/HistoryContent/index.tsx": "export default function HistoryContent() {}\n",
    "src/components/BookmarksContent/index.tsx": "export default function BookmarksContent() {}\n",
    "src/components/NewTabHeader/index.tsx": "export default function NewTabHeader() {}\n",
    "scripts/dev.js": "console.log('dev');\n",
    "scripts/create.js": "console.log('create');\n",
    "node_modules/react/index.js": "module.exports = {};\n",
    "dist/newtab.html": "<html></html>\n",
    ".git/HEAD": "ref: refs/heads/main\n",
}


def write_template(root: Path) -> Path:
    """Write the miniature extension template under *root*."""
    files: dict[str, str] = {
        **PAGE_FILES,
        "package.json": json.dumps(PACKAGE, indent=2),
        "package-lock.json": json.dumps(LOCKFILE, indent=2),
        "README.md": README,
        "vite.config.ts": VITE_CONFIG,
        "src/manifest.json": json.dumps(MANIFEST, indent=2),
        "src/style.css": STYLESHEET,
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under *root* (relative POSIX path) to its bytes."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A complete three-variant template in a temporary directory."""
    return write_template(tmp_path / "template")


@pytest.fixture
def generator_config(template_root: Path) -> GeneratorConfig:
    """Generator configuration pointing at ``template_root``."""
    return GeneratorConfig(template_root=template_root)


@pytest.fixture
def registry() -> VariantRegistry:
    return default_registry()


@pytest.fixture
def newtab(registry: VariantRegistry) -> Variant:
    return registry.get("newtab")


@pytest.fixture
def history(registry: VariantRegistry) -> Variant:
    return registry.get("history")


@pytest.fixture
def bookmarks(registry: VariantRegistry) -> Variant:
    return registry.get("bookmarks")


@pytest.fixture
def manifest_text() -> str:
    return json.dumps(MANIFEST, indent=2)


@pytest.fixture
def vite_config_text() -> str:
    return VITE_CONFIG


@pytest.fixture
def stylesheet_text() -> str:
    return STYLESHEET


@pytest.fixture
def readme_text() -> str:
    return README


@pytest.fixture
def package_text() -> str:
    return json.dumps(PACKAGE, indent=2)


@pytest.fixture
def lockfile_text() -> str:
    return json.dumps(LOCKFILE, indent=2)


@pytest.fixture
def tree_snapshot():
    """The ``snapshot`` helper, for comparing directory trees."""
    return snapshot
