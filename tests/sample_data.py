"""Sample Push Chain artifacts and small helpers shared by the test modules."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pushchain_mcp.server import MCPServer
from pushchain_mcp.tools import ToolDefinition

CLIENT_SOURCE = """\
import { Signer } from './signer';

// PushClient wraps a universal signer.
export class PushClient {
  private signer: Signer;

  constructor(signer: Signer) {
    this.signer = signer;
  }

  async sendTransaction(tx: TxRequest): Promise<string> {
    return this.signer.send(tx);
  }

  getAccount(): UniversalAccount {
    return this.signer.account;
  }
}

export function createPushClient(signer: Signer): PushClient {
  return new PushClient(signer);
}
"""

TYPES_SOURCE = """\
export interface UniversalAccount {
  chain: string;
  address: string;
}

export type TxRequest = {
  to: string;
  value: bigint;
};

export type ChainId = string;
"""

CONSTANTS_SOURCE = """\
export const CHAIN_IDS = {
  mainnet: 'eip155:1',
  testnet: 'eip155:11155111',
};
"""

HELPER_NAMES = [f"helper{index:02d}" for index in range(1, 24)]
HELPERS_SOURCE = "".join(
    f"export function {name}(): number {{\n  return {index};\n}}\n\n"
    for index, name in enumerate(HELPER_NAMES)
)

UI_SOURCE = """\
import React from 'react';

export function PushWalletProvider(props: ProviderProps) {
  return null;
}

export function usePushWallet() {
  return usePushWalletContext();
}

export function PushUniversalAccountButton(props: ButtonProps) {
  return null;
}

export const DEFAULT_THEME = 'light';
"""

SDK_SOURCES = {
    "packages/core/src/client.ts": CLIENT_SOURCE,
    "packages/core/src/types.ts": TYPES_SOURCE,
    "packages/core/src/constants.ts": CONSTANTS_SOURCE,
    "packages/core/src/utils/helpers.ts": HELPERS_SOURCE,
    "packages/ui-kit/src/components.tsx": UI_SOURCE,
    "packages/other/src/ignored.ts": "export function ignored() {}\n",
}

SDK_EXPORTS = {
    "functions": [
        {"name": "createPushClient", "file": "packages/core/src/client.ts"},
        *(
            {"name": name, "file": "packages/core/src/utils/helpers.ts"}
            for name in HELPER_NAMES
        ),
        {"name": "PushWalletProvider", "file": "packages/ui-kit/src/components.tsx"},
        {"name": "usePushWallet", "file": "packages/ui-kit/src/components.tsx"},
        {
            "name": "PushUniversalAccountButton",
            "file": "packages/ui-kit/src/components.tsx",
        },
        {"name": "ignored", "file": "packages/other/src/ignored.ts"},
    ],
    "classes": [{"name": "PushClient", "file": "packages/core/src/client.ts"}],
    "types": [
        {"name": "TxRequest", "file": "packages/core/src/types.ts"},
        {"name": "ChainId", "file": "packages/core/src/types.ts"},
    ],
    "interfaces": [{"name": "UniversalAccount", "file": "packages/core/src/types.ts"}],
    "constants": [
        {"name": "CHAIN_IDS", "file": "packages/core/src/constants.ts"},
        {"name": "DEFAULT_THEME", "file": "packages/ui-kit/src/components.tsx"},
    ],
}

SDK_PACKAGES = {
    "packages": [
        {
            "name": "@pushchain/core",
            "version": "1.2.0",
            "description": "Push Chain core SDK",
            "dependencies": {"viem": "^2.21.0"},
        },
        {
            "name": "@pushchain/ui-kit",
            "version": "0.4.1",
            "description": "React components for Push Chain",
            "dependencies": {"react": "^18.0.0"},
        },
        {"name": "@pushchain/unrelated", "version": "0.0.1"},
    ]
}

INTRO_DOC = """\
---
title: Intro to Push Chain
slug: /intro
---

# Intro

Push Chain is a shared state L1 for universal apps.

```typescript
const client = await PushChain.initialize(signer);
```
"""

WALLET_SETUP_DOC = """\
# Wallet Setup

Connect a wallet before sending transactions.

```typescript
const account = client.universal.account;
```

```bash
npm install @pushchain/core
```
"""


def _doc_record(path: str, content: str) -> dict[str, Any]:
    return {
        "name": path.rsplit("/", 1)[-1],
        "path": path,
        "html_url": f"https://github.com/pushchain/push-chain-website/blob/main/{path}",
        "content": content,
    }


TUTORIAL_PATHS = [
    f"docs/chain/01-tutorials/0{index}-Tutorial-Step-{index}.mdx"
    for index in range(1, 6)
]
SETUP_PATHS = [
    "docs/chain/02-setup/01-Wallet-Setup.mdx",
    "docs/chain/02-setup/02-Node-Setup.mdx",
    "docs/chain/02-setup/03-Testnet-Faucet.mdx",
]
INTRO_PATH = "docs/chain/01-Intro-Push-Chain.mdx"

DOCS_CACHE = {
    "generated_at": "2025-01-01T00:00:00+00:00",
    "source": {"owner": "pushchain", "repo": "push-chain-website"},
    "docs": [
        _doc_record(INTRO_PATH, INTRO_DOC),
        *(
            _doc_record(path, f"# Tutorial\n\nStep {index} of building an app.\n")
            for index, path in enumerate(TUTORIAL_PATHS, start=1)
        ),
        _doc_record(SETUP_PATHS[0], WALLET_SETUP_DOC),
        _doc_record(SETUP_PATHS[1], "# Node Setup\n\nRun a validator node.\n"),
        _doc_record(SETUP_PATHS[2], "# Faucet\n\nRequest testnet tokens.\n"),
    ],
}


def write_json(path: Path, payload: Any) -> None:
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def tool_by_name(tools: list[ToolDefinition], name: str) -> ToolDefinition:
    """Locate a tool by name in the provided collection."""
    for tool in tools:
        if tool.name == name:
            return tool
    raise AssertionError(f"Tool '{name}' not found")


def call_json(server: MCPServer, name: str, arguments: dict[str, Any]) -> Any:
    """Run a tool that answers in JSON and decode its text."""
    result = server.call_tool(name, arguments)
    assert result.is_error is False, result.text
    return json.loads(result.text)
