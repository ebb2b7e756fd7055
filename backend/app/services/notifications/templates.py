import os
from jinja2 import Environment, FileSystemLoader, select_autoescape
from typing import Any, Dict, Optional

# Setup Jinja2 environment
current_dir = os.path.dirname(os.path.abspath(__file__))
template_dir = os.path.join(current_dir, "../../templates/email")
env = Environment(
    loader=FileSystemLoader(template_dir),
    autoescape=select_autoescape(["html"]),
)

def render_template(template_name: str, context: Dict[str, Any]) -> str:
    template = env.get_template(template_name)
    return template.render(**context)

def get_project_invitation_template(
    link: str,
    instance_name: str,
    recipient_name: str,
    project_name: str,
    inviter_name: str,
    expires_on: str,
    message: Optional[str] = None,
) -> str:
    return render_template("project_invitation.html", {
        "link": link,
        "instance_name": instance_name,
        "recipient_name": recipient_name,
        "project_name": project_name,
        "inviter_name": inviter_name,
        "expires_on": expires_on,
        "message": message,
    })

def get_mitigation_assigned_template(
    link: str,
    instance_name: str,
    recipient_name: str,
    mitigation_title: str,
    project_name: Optional[str] = None,
    due_date: Optional[str] = None,
) -> str:
    return render_template("mitigation_assigned.html", {
        "link": link,
        "instance_name": instance_name,
        "recipient_name": recipient_name,
        "mitigation_title": mitigation_title,
        "project_name": project_name,
        "due_date": due_date,
    })
