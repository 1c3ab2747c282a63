"""User-visible text for menu commands."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .schemas import LayoutPlan, MenuEntry


MENU_TITLE = "📋 功能菜单"
DENIED = "您没有权限执行此操作。"
MISSING_NAME_OR_COMMAND = "请输入菜单项名称和命令。"
MISSING_KEYWORD = "请输入搜索关键词。"
MISSING_CATEGORY = "请输入新的分类名称。"
NOTHING_TO_EDIT = "请至少指定一个要修改的字段。"
RENDER_APOLOGY = "抱歉，图片菜单暂时无法生成，请稍后再试。"
ADD_FAILED = "添加菜单项失败，请稍后重试。"
SUGGESTIONS_DISABLED = "当前未开放菜单项建议功能。"
NO_CATEGORIES = "暂无分类。"


def not_found(entry_id: str) -> str:
    return f'未找到ID为"{entry_id}"的菜单项。'


def empty_menu(category: Optional[str]) -> str:
    where = f'在分类"{category}"中' if category else ""
    return f"没有找到菜单项{where}。"


def menu_text(plan: LayoutPlan) -> str:
    """Text rendition of a layout plan: grouped entries then footer."""
    lines: List[str] = [MENU_TITLE, ""]
    indent = "  " if plan.grouped else ""
    for group in plan.groups:
        if group.category is not None:
            lines.append(f"📁 {group.category}")
        for entry in group.entries:
            lines.append(f"{indent}• {entry.name} - {entry.description}")
            lines.append(f"{indent}  💡 使用: {entry.command}")
            lines.append("")
    if plan.footer:
        lines.append("")
        lines.extend(plan.footer)
    return "\n".join(lines).rstrip() + "\n"


def entry_list_text(entries: Sequence[MenuEntry], category: Optional[str]) -> str:
    if not entries:
        where = f'分类"{category}"的' if category else ""
        return f"没有找到{where}菜单项。"
    header = f"📋 菜单项列表{f' (分类: {category})' if category else ''}"
    lines: List[str] = [header, ""]
    for entry in entries:
        state = "✅ 启用" if entry.enabled else "❌ 禁用"
        lines.extend(
            [
                f"🆔 {entry.id}",
                f"📛 名称: {entry.name}",
                f"📖 描述: {entry.description}",
                f"⚡ 命令: {entry.command}",
                f"📁 分类: {entry.category}",
                f"📊 顺序: {entry.order}",
                f"🔧 状态: {state}",
                "─" * 20,
            ]
        )
    return "\n".join(lines) + "\n"


def search_text(entries: Sequence[MenuEntry], keyword: str) -> str:
    if not entries:
        return f'没有找到包含"{keyword}"的菜单项。'
    lines: List[str] = [f'🔍 搜索结果 (关键词: "{keyword}")', ""]
    for entry in entries:
        lines.append(f"• {entry.name} - {entry.description}")
        lines.append(f"  💡 使用: {entry.command}")
        lines.append(f"  📁 分类: {entry.category}")
        lines.append("")
    return "\n".join(lines)


def categories_text(categories: Sequence[str]) -> str:
    if not categories:
        return NO_CATEGORIES
    return "📁 所有分类:\n" + "\n".join(f"• {cat}" for cat in categories)


def added(entry: MenuEntry) -> str:
    return f'✅ 菜单项 "{entry.name}" 添加成功！ID: {entry.id}'


def updated(entry: MenuEntry) -> str:
    return f'✅ 菜单项 "{entry.name}" 更新成功！'


def deleted(entry: MenuEntry) -> str:
    return f'✅ 菜单项 "{entry.name}" 已删除。'


def toggled(entry: MenuEntry) -> str:
    return f'✅ 菜单项 "{entry.name}" 已{"启用" if entry.enabled else "禁用"}。'


def moved(entry: MenuEntry, old_category: str) -> str:
    return f'✅ 菜单项 "{entry.name}" 已从"{old_category}"移动到"{entry.category}"。'


def suggestion_received(name: str) -> str:
    return f'📝 感谢您的建议！菜单项 "{name}" 已提交给管理员审核。'
