# -*- coding: utf-8 -*-
"""Plain-text rendering of generated video scripts."""

from __future__ import annotations

from typing import Any, Dict, List

_RULE = "=" * 50


def _section(title: str) -> str:
    return f"--- {title} ---"


def _part(value: Any) -> Dict[str, Any]:
    """Script parts may come back from the model as bare strings."""
    if isinstance(value, dict):
        return value
    if isinstance(value, str) and value.strip():
        return {"what_to_say": value.strip()}
    return {}


def format_script_as_text(script: Dict[str, Any]) -> str:
    title = script.get("title") or "Untitled Script"
    data = script.get("script_data")
    if not data:
        return f"{title}\n\nNo script data available."

    lines: List[str] = [_RULE, title, _RULE, ""]

    meta = []
    if script.get("platform"):
        meta.append(f"Platform: {script['platform']}")
    if script.get("content_type"):
        meta.append(f"Type: {script['content_type']}")
    if script.get("category"):
        meta.append(f"Category: {script['category']}")
    if meta and script.get("created_at"):
        meta.append(f"Created: {str(script['created_at'])[:10]}")
    if meta:
        lines.extend([" | ".join(meta), ""])

    if data.get("approach"):
        lines.extend([f"Approach: {data['approach']}", ""])

    hook = _part(data.get("hook"))
    if hook:
        lines.append(_section("THE HOOK"))
        if hook.get("what_to_say"):
            lines.append(f'Say: "{hook["what_to_say"]}"')
        if hook.get("how_to_say_it"):
            lines.append(f"Delivery: {hook['how_to_say_it']}")
        if hook.get("camera_notes"):
            lines.append(f"Camera: {hook['camera_notes']}")
        if hook.get("duration"):
            lines.append(f"Duration: {hook['duration']}")
        lines.append("")

    body = data.get("body") or []
    if not isinstance(body, list):
        body = [body]
    for i, section in enumerate(map(_part, body), start=1):
        lines.append(_section(str(section.get("section") or f"Section {i}").upper()))
        if section.get("what_to_say"):
            lines.append(f"Script: {section['what_to_say']}")
        if section.get("how_to_say_it"):
            lines.append(f"Delivery: {section['how_to_say_it']}")
        if section.get("b_roll_notes"):
            lines.append(f"B-Roll: {section['b_roll_notes']}")
        lines.append("")

    cta = _part(data.get("cta"))
    if cta:
        lines.append(_section("CALL TO ACTION"))
        if cta.get("what_to_say"):
            lines.append(f'Say: "{cta["what_to_say"]}"')
        if cta.get("on_screen_text"):
            lines.append(f"On-screen: {cta['on_screen_text']}")
        lines.append("")

    if data.get("caption"):
        lines.extend([_section("CAPTION"), str(data["caption"]), ""])

    hashtags = data.get("hashtags") or []
    if isinstance(hashtags, str):
        hashtags = hashtags.split()
    if hashtags:
        tags = [h if h.startswith("#") else f"#{h}" for h in map(str, hashtags)]
        lines.extend([_section("HASHTAGS"), " ".join(tags), ""])

    if data.get("thumbnail_idea"):
        lines.extend([_section("THUMBNAIL IDEA"), str(data["thumbnail_idea"]), ""])

    checklist = data.get("filming_checklist") or []
    if isinstance(checklist, str):
        checklist = [checklist]
    if checklist:
        lines.append(_section("FILMING CHECKLIST"))
        lines.extend(f"  {i}. {item}" for i, item in enumerate(checklist, start=1))
        lines.append("")

    if data.get("total_duration") or data.get("equipment_needed"):
        lines.append(_section("DETAILS"))
        if data.get("total_duration"):
            lines.append(f"Duration: {data['total_duration']}")
        if data.get("equipment_needed"):
            lines.append(f"Equipment: {data['equipment_needed']}")
        lines.append("")

    return "\n".join(lines)
