# /*
# Copyright 2026 The Cloum Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""AI command: a setup prompt for an AI assistant."""

from __future__ import annotations

from urllib.parse import quote

import typer

from cloum import console, logger
from cloum.constants import CLAUDE_NEW_CHAT_URL, CLAUDE_URL, GITHUB_REPO, INSTALL_SCRIPT_TEMPLATE

SETUP_PROMPT = f"""You are helping a user set up the cloum CLI on their machine.

## About cloum

cloum is a command-line tool that manages Kubernetes cluster connections across GCP,
AWS and Azure. It keeps named cluster definitions in ~/.config/cloum/clusters.json and
handles authentication and kubeconfig setup for GKE, EKS and AKS clusters.

## Your task

Go through these steps in order and ask the user for input where needed.

### Step 1: Detect the environment

Run these checks and report which tools are installed:
- `cloum --version 2>/dev/null || echo missing`
- `gcloud --version 2>/dev/null | head -1 || echo missing`
- `aws --version 2>/dev/null || echo missing`
- `az --version 2>/dev/null | head -1 || echo missing`
- `kubectl version --client 2>/dev/null || echo missing`

### Step 2: Install missing CLIs

Give the install command for each missing CLI on the user's OS:

**gcloud**: https://cloud.google.com/sdk/docs/install
**aws**: https://aws.amazon.com/cli/
**az**: `brew install azure-cli` (macOS) or https://learn.microsoft.com/cli/azure/install-azure-cli
**kubectl**: `brew install kubectl` (macOS) or https://kubernetes.io/docs/tasks/tools/

### Step 3: Authenticate the cloud providers

Ask which providers the user needs, then walk them through the login:

**GCP**:
```bash
gcloud auth login
gcloud config set project <PROJECT_ID>
```

**AWS** (SSO):
```bash
aws configure sso
aws sso login --profile <PROFILE_NAME>
```

**AWS** (access keys):
```bash
aws configure
```

**Azure**:
```bash
az login
az account set --subscription <SUBSCRIPTION_NAME_OR_ID>
```

### Step 4: Add clusters

For each cluster the user wants to manage, run the matching command:

```bash
# GCP GKE
cloum add gcp --name <ALIAS> --cluster-name <CLUSTER> --region <REGION> --project <PROJECT>

# AWS EKS
cloum add aws --name <ALIAS> --cluster-name <CLUSTER> --region <REGION> --profile <PROFILE>

# Azure AKS
cloum add azure --name <ALIAS> --cluster-name <CLUSTER> --region <REGION> --resource-group <RG>
```

### Step 5: Verify

```bash
cloum list              # shows the added clusters
cloum status            # shows which providers are authenticated
cloum connect <ALIAS>   # connects to one cluster
kubectl get nodes       # confirms the connection
```

## Notes

- Config file: ~/.config/cloum/clusters.json (human-editable JSON)
- If `cloum` is not installed: `curl -sL {INSTALL_SCRIPT_TEMPLATE.format(repo=GITHUB_REPO)} | bash`
- When something fails, ask for the full output and the user's OS and shell
"""


def claude_url(prompt: str = SETUP_PROMPT) -> str:
    """New-chat URL with *prompt* pre-filled."""
    return CLAUDE_NEW_CHAT_URL.format(prompt=quote(prompt, safe=""))


def ai(
    open_browser: bool = typer.Option(False, "--open", help="Open Claude in the browser with the prompt"),
) -> None:
    """Print a setup prompt for an AI assistant, or open it in Claude."""
    if open_browser:
        code = typer.launch(claude_url())
        if code != 0:
            logger.debug("Browser launcher exited with %d", code)
            console.print("[yellow]Could not open browser. Visit this URL manually:[/yellow]")
            console.print(f"  {CLAUDE_URL}")
            console.print("\n[dim]Or run: cloum ai  (to print the setup prompt)[/dim]")
        else:
            console.print("[green]✓ Opened Claude in your browser with the setup prompt.[/green]")
        return

    typer.echo(SETUP_PROMPT)
    console.print("[dim]" + "─" * 65 + "[/dim]")
    console.print("Copy the prompt above and paste it into Claude (claude.ai).")
    console.print("Or pipe it directly:")
    console.print("  cloum ai | pbcopy   # macOS, copies to clipboard")
    console.print("  cloum ai | xclip    # Linux")
    console.print("[dim]" + "─" * 65 + "[/dim]")
