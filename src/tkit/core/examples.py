"""Built-in example tool definitions.

STARTER_TOOLS seed a fresh registry during `tkit init`; CATALOG is the wider
list printed by `tkit examples`.
"""

from dataclasses import dataclass

from tkit.core.types import ActionKind, Tool


@dataclass(frozen=True)
class CatalogEntry:
    category: str
    name: str
    description: str
    install: tuple[str, ...]
    run: tuple[str, ...]


def _apt_tool(name: str, description: str, install: list[str], run: list[str]) -> Tool:
    return Tool(
        name=name,
        description=description,
        commands={
            ActionKind.INSTALL: tuple(install),
            ActionKind.REMOVE: (f"sudo apt-get remove -y {name}",),
            ActionKind.UPDATE: ("sudo apt-get update", f"sudo apt-get upgrade -y {name}"),
            ActionKind.RUN: tuple(run),
        },
    )


STARTER_TOOLS: tuple[Tool, ...] = (
    _apt_tool(
        "git",
        "Version control system",
        ["sudo apt-get update", "sudo apt-get install -y git"],
        ["git --version"],
    ),
    _apt_tool(
        "docker",
        "Container platform",
        ["curl -fsSL https://get.docker.com -o get-docker.sh", "sudo sh get-docker.sh"],
        ["docker --version"],
    ),
    _apt_tool(
        "node",
        "Node.js runtime",
        [
            "curl -fsSL https://deb.nodesource.com/setup_lts.x | sudo -E bash -",
            "sudo apt-get install -y nodejs",
        ],
        ["node --version", "npm --version"],
    ),
    _apt_tool(
        "python",
        "Python programming language",
        ["sudo apt-get update", "sudo apt-get install -y python3 python3-pip"],
        ["python3 --version"],
    ),
)


CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        "Development Tools",
        "git",
        "Version control system",
        ("sudo apt-get update", "sudo apt-get install -y git"),
        ("git --version",),
    ),
    CatalogEntry(
        "Development Tools",
        "docker",
        "Container platform",
        ("curl -fsSL https://get.docker.com -o get-docker.sh", "sudo sh get-docker.sh"),
        ("docker --version",),
    ),
    CatalogEntry(
        "Development Tools",
        "vscode",
        "Visual Studio Code editor",
        ("sudo snap install code --classic",),
        ("code --version",),
    ),
    CatalogEntry(
        "Programming Languages",
        "python",
        "Python programming language",
        ("sudo apt-get update", "sudo apt-get install -y python3 python3-pip"),
        ("python3 --version",),
    ),
    CatalogEntry(
        "Programming Languages",
        "rust",
        "Rust programming language",
        ("curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | sh -s -- -y",),
        ("rustc --version",),
    ),
    CatalogEntry(
        "Programming Languages",
        "golang",
        "Go programming language",
        ("sudo apt-get update", "sudo apt-get install -y golang-go"),
        ("go version",),
    ),
    CatalogEntry(
        "Utilities",
        "curl-test",
        "Test HTTP requests with curl",
        (),
        ("curl -s https://httpbin.org/json",),
    ),
    CatalogEntry(
        "Utilities",
        "sysinfo",
        "Show system information",
        (),
        ("uname -a", "df -h", "free -h"),
    ),
    CatalogEntry(
        "Web Development",
        "nodejs",
        "Node.js runtime",
        (
            "curl -fsSL https://deb.nodesource.com/setup_lts.x | sudo -E bash -",
            "sudo apt-get install -y nodejs",
        ),
        ("node --version", "npm --version"),
    ),
    CatalogEntry(
        "Web Development",
        "nginx",
        "Web server",
        ("sudo apt-get update", "sudo apt-get install -y nginx"),
        ("nginx -v",),
    ),
    CatalogEntry(
        "DevOps Tools",
        "kubectl",
        "Kubernetes command-line tool",
        ("sudo snap install kubectl --classic",),
        ("kubectl version --client",),
    ),
    CatalogEntry(
        "DevOps Tools",
        "terraform",
        "Infrastructure as Code tool",
        ("sudo snap install terraform --classic",),
        ("terraform version",),
    ),
)
