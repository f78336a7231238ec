"""Hand-authored fallback diagram templates.

Used whenever the component extractor cannot produce a valid structure.
Selection is by keyword, or by timestamp rotation when the whole pipeline
failed and no keyword signal is trusted.

Dependencies: assistant.models.diagram
System role: Guaranteed-valid diagram components for the fallback path
"""

import re
import time

from assistant.models.diagram import DiagramComponents

PRIMARY_NODE = "RiverMeadow Platform"

_TEMPLATES: dict[str, dict] = {
    "os": {
        "title": "Operating System Migration Platform Architecture",
        "nodes": [
            PRIMARY_NODE,
            "OS Discovery Module",
            "OS Transformation Engine",
            "Hypervisor Connector",
            "OS Template Repository",
            "Runtime Configuration Manager",
        ],
        "connections": [
            {"from": "OS Discovery Module", "to": PRIMARY_NODE, "label": "System Fingerprinting"},
            {"from": PRIMARY_NODE, "to": "OS Transformation Engine", "label": "Migration Orchestration"},
            {"from": "OS Template Repository", "to": "OS Transformation Engine", "label": "Template Provisioning"},
            {"from": "OS Transformation Engine", "to": "Hypervisor Connector", "label": "VM Deployment"},
            {"from": "Hypervisor Connector", "to": "Runtime Configuration Manager", "label": "Post-Migration Tuning"},
        ],
        "categories": {
            "Supported OS Types": ["Windows Server", "RHEL", "Ubuntu", "CentOS", "SUSE Linux"],
            "Migration Capabilities": [
                "OS Version Upgrade",
                "P2V Conversion",
                "Cross-Hypervisor Movement",
                "OS Configuration Transfer",
            ],
            "Technical Components": [
                "Boot Volume Handler",
                "Registry Manager",
                "Driver Injection",
                "Network Configurator",
            ],
        },
    },
    "aws": {
        "title": "AWS Cloud Migration Architecture",
        "nodes": [
            PRIMARY_NODE,
            "AWS API Gateway",
            "EC2 Instance Manager",
            "S3 Data Transfer Service",
            "VPC Configuration Tool",
            "IAM Security Controller",
        ],
        "connections": [
            {"from": PRIMARY_NODE, "to": "AWS API Gateway", "label": "Secure API Calls"},
            {"from": "AWS API Gateway", "to": "EC2 Instance Manager", "label": "VM Provisioning"},
            {"from": PRIMARY_NODE, "to": "S3 Data Transfer Service", "label": "Data Replication"},
            {"from": "EC2 Instance Manager", "to": "VPC Configuration Tool", "label": "Network Setup"},
            {"from": "VPC Configuration Tool", "to": "IAM Security Controller", "label": "Permission Assignment"},
        ],
        "categories": {
            "AWS Services": ["EC2", "S3", "VPC", "IAM", "CloudFormation", "Route 53"],
            "Security Features": ["KMS Encryption", "Security Groups", "IAM Roles", "VPC Endpoints"],
            "Optimization Tools": ["Auto Scaling Groups", "Elastic Load Balancing", "Reserved Instances"],
        },
    },
    "azure": {
        "title": "Azure Cloud Migration Framework",
        "nodes": [
            PRIMARY_NODE,
            "Azure Resource Manager",
            "Virtual Machine Scale Sets",
            "Azure Blob Storage",
            "Application Gateway",
            "Key Vault Service",
        ],
        "connections": [
            {"from": PRIMARY_NODE, "to": "Azure Resource Manager", "label": "Resource Orchestration"},
            {"from": "Azure Resource Manager", "to": "Virtual Machine Scale Sets", "label": "VM Deployment"},
            {"from": PRIMARY_NODE, "to": "Azure Blob Storage", "label": "Storage Replication"},
            {"from": "Virtual Machine Scale Sets", "to": "Application Gateway", "label": "Traffic Management"},
            {"from": "Application Gateway", "to": "Key Vault Service", "label": "Certificate Management"},
        ],
        "categories": {
            "Azure Services": [
                "Virtual Machines",
                "Blob Storage",
                "Virtual Networks",
                "Load Balancers",
                "ExpressRoute",
            ],
            "Migration Tools": ["Azure Migrate", "Site Recovery", "Database Migration Service"],
            "Security Features": ["Key Vault", "Network Security Groups", "Azure AD Integration"],
        },
    },
    "process": {
        "title": "Cloud Migration Process Framework",
        "nodes": [
            PRIMARY_NODE,
            "Discovery Module",
            "Assessment Engine",
            "Migration Planner",
            "Execution Orchestrator",
            "Validation System",
        ],
        "connections": [
            {"from": "Discovery Module", "to": "Assessment Engine", "label": "Environment Analysis"},
            {"from": "Assessment Engine", "to": "Migration Planner", "label": "Recommendations"},
            {"from": "Migration Planner", "to": PRIMARY_NODE, "label": "Plan Implementation"},
            {"from": PRIMARY_NODE, "to": "Execution Orchestrator", "label": "Task Automation"},
            {"from": "Execution Orchestrator", "to": "Validation System", "label": "Quality Control"},
        ],
        "categories": {
            "Migration Phases": [
                "Discovery",
                "Assessment",
                "Planning",
                "Implementation",
                "Validation",
                "Optimization",
            ],
            "Stakeholders": [
                "IT Operations",
                "Cloud Architects",
                "Application Owners",
                "Security Teams",
                "Business Units",
            ],
            "Key Metrics": [
                "Migration Speed",
                "Application Performance",
                "Cost Reduction",
                "Downtime Minimization",
            ],
        },
    },
    "generic": {
        "title": "RiverMeadow Cloud Migration Platform Architecture",
        "nodes": [
            PRIMARY_NODE,
            "Source Environment Connector",
            "Migration Orchestration Engine",
            "Target Cloud Adapter",
            "Data Replication Manager",
            "Configuration Controller",
        ],
        "connections": [
            {"from": "Source Environment Connector", "to": PRIMARY_NODE, "label": "Source Data Capture"},
            {"from": PRIMARY_NODE, "to": "Migration Orchestration Engine", "label": "Workflow Management"},
            {"from": "Migration Orchestration Engine", "to": "Data Replication Manager", "label": "Data Transfer"},
            {"from": "Data Replication Manager", "to": "Target Cloud Adapter", "label": "Deployment Prep"},
            {"from": "Target Cloud Adapter", "to": "Configuration Controller", "label": "Infrastructure Setup"},
        ],
        "categories": {
            "Key Capabilities": [
                "Automated Discovery",
                "Cloud Agnostic Movement",
                "Workload Optimization",
                "Incremental Sync",
            ],
            "Target Platforms": ["AWS", "Azure", "Google Cloud", "VMware", "OpenStack", "IBM Cloud"],
            "Service Features": [
                "API Integration",
                "Template Management",
                "Credential Handling",
                "Audit Logging",
            ],
        },
    },
}

# Checked in order; first match wins.
_KEYWORD_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("os", ("os", "operating system")),
    ("aws", ("aws", "amazon")),
    ("azure", ("azure", "microsoft")),
    ("process", ("process", "workflow")),
]

ROTATION = ("os", "aws", "process", "generic")

TEMPLATE_NAMES = tuple(_TEMPLATES)


def get_template(name: str) -> DiagramComponents:
    """Return a fresh copy of the named template."""
    return DiagramComponents.model_validate(_TEMPLATES[name])


def template_name_for(prompt: str) -> str:
    """Pick the template name whose keywords appear in the prompt."""
    text = prompt.lower()
    for name, keywords in _KEYWORD_RULES:
        if any(re.search(rf"\b{re.escape(keyword)}\b", text) for keyword in keywords):
            return name
    return "generic"


def select_template(prompt: str) -> DiagramComponents:
    """Keyword-selected fallback template for a prompt."""
    return get_template(template_name_for(prompt))


def rotating_template(timestamp_ms: int | None = None) -> tuple[str, DiagramComponents]:
    """Template chosen by timestamp rotation over os, aws, process and generic."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    name = ROTATION[timestamp_ms % len(ROTATION)]
    return name, get_template(name)
