"""
Built-in tool catalog.

Each entry pairs display metadata with a prompt builder. The core tool asks
for the structured report described in report_schema.py; every other tool
asks for free-form Markdown.
"""

from __future__ import annotations

from typing import List

from seo_insights.abstractions.dto.tools import PromptBuilder, PromptPair, ToolDescriptor, ToolKind

CORE_TOOL_ID = "seo-insight"

# Presentation order of categories.
CATEGORY_ORDER: List[str] = [
    "核心分析",
    "关键词研究",
    "内容创作",
    "页面优化",
    "技术SEO",
    "外链与本地",
    "竞争与策略",
]

_BASE_SYSTEM_PROMPT = (
    "你是一位拥有十年经验的资深SEO专家，熟悉Google搜索排名机制与内容营销。"
    "请结合实时网络搜索结果进行分析，回答务必具体、可执行，并使用简体中文。"
)


def _core_prompt(user_input: str) -> PromptPair:
    topic = user_input.strip()
    return PromptPair(
        system_prompt=(
            _BASE_SYSTEM_PROMPT
            + "你的任务是为给定主题生成结构化的SEO洞察报告：识别3到5个高相关度的长尾关键词，"
            "并给出至少5个章节的推荐内容结构。只输出符合给定JSON结构的数据。"
        ),
        user_query=f"主题：{topic}",
    )


def free_text_prompt(instruction: str, query_template: str = "主题：{input}") -> PromptBuilder:
    """Prompt builder for Markdown tools: shared persona plus a tool-specific instruction."""
    system_prompt = f"{_BASE_SYSTEM_PROMPT}{instruction}请使用Markdown格式输出。"

    def build(user_input: str) -> PromptPair:
        return PromptPair(system_prompt=system_prompt, user_query=query_template.format(input=user_input.strip()))

    return build


def _tool(tool_id: str, name: str, category: str, instruction: str, description: str,
          query_template: str = "主题：{input}") -> ToolDescriptor:
    return ToolDescriptor(
        id=tool_id,
        display_name=name,
        category=category,
        kind=ToolKind.FREE_TEXT,
        prompt_builder=free_text_prompt(instruction, query_template),
        description=description,
    )


def build_catalog() -> List[ToolDescriptor]:
    return [
        ToolDescriptor(
            id=CORE_TOOL_ID,
            display_name="SEO 洞察报告",
            category="核心分析",
            kind=ToolKind.SCHEMA_DRIVEN,
            prompt_builder=_core_prompt,
            description="目标主题、相关关键词与推荐内容结构",
        ),
        # 关键词研究
        _tool("keyword-expansion", "关键词拓展", "关键词研究",
              "请围绕主题拓展20个相关关键词，并按搜索意图分组，标注预估竞争程度。",
              "按意图分组的相关关键词"),
        _tool("long-tail-keywords", "长尾关键词挖掘", "关键词研究",
              "请挖掘15个转化潜力高的长尾关键词，说明每个关键词适合的内容形式。",
              "高转化长尾词"),
        _tool("search-intent", "搜索意图分析", "关键词研究",
              "请判断该关键词的主要搜索意图（信息型、导航型、交易型、商业调查型），并说明满足该意图的页面应具备的要素。",
              "判断关键词的搜索意图", "关键词：{input}"),
        _tool("keyword-difficulty", "关键词难度评估", "关键词研究",
              "请根据当前搜索结果页的竞争情况评估该关键词的排名难度，并给出切入建议。",
              "排名难度与切入点", "关键词：{input}"),
        _tool("question-keywords", "问题型关键词", "关键词研究",
              "请列出用户围绕该主题最常搜索的问题（包含“如何”“为什么”“哪个”等句式），并按热度排序。",
              "用户常问的问题"),
        # 内容创作
        _tool("article-outline", "文章大纲生成", "内容创作",
              "请为该主题撰写一份详细的SEO文章大纲，包含H1、H2、H3层级以及每节的写作要点。",
              "H1-H3 层级大纲"),
        _tool("title-generator", "标题生成器", "内容创作",
              "请生成10个点击率高且包含核心关键词的SEO标题，长度控制在60个字符以内。",
              "高点击率标题"),
        _tool("meta-description", "Meta 描述生成", "内容创作",
              "请生成5条包含核心关键词、长度在150到160个字符之间且带有行动号召的Meta描述。",
              "搜索结果摘要文案"),
        _tool("faq-generator", "FAQ 生成", "内容创作",
              "请生成8组适合放入FAQ区块的问答，答案简洁准确，便于获得精选摘要。",
              "FAQ 问答对"),
        _tool("content-gap", "内容缺口分析", "内容创作",
              "请分析排名靠前的页面在该主题上普遍遗漏的子话题，指出可以差异化覆盖的内容缺口。",
              "竞品遗漏的子话题"),
        # 页面优化
        _tool("on-page-audit", "页面优化清单", "页面优化",
              "请给出针对该主题页面的站内优化检查清单，涵盖标题、标题层级、关键词密度、图片与内链。",
              "站内优化检查清单"),
        _tool("internal-linking", "内链策略", "页面优化",
              "请为该主题设计内链结构：支柱页面、集群页面以及推荐的锚文本。",
              "支柱与集群内链规划"),
        _tool("schema-markup", "结构化数据建议", "页面优化",
              "请推荐适合该主题页面的Schema.org结构化数据类型，并给出JSON-LD示例。",
              "Schema.org 类型与 JSON-LD"),
        _tool("image-alt", "图片 ALT 文本", "页面优化",
              "请为该主题文章建议6张配图，并为每张图片撰写包含关键词的ALT文本与文件名。",
              "配图与 ALT 文本"),
        # 技术SEO
        _tool("technical-checklist", "技术SEO检查", "技术SEO",
              "请给出与该主题网站相关的技术SEO检查清单：抓取、索引、规范化、重定向与移动端适配。",
              "抓取与索引检查清单"),
        _tool("site-speed", "页面速度优化", "技术SEO",
              "请针对该类型网站给出Core Web Vitals（LCP、INP、CLS）的优化建议，按收益排序。",
              "Core Web Vitals 建议"),
        _tool("robots-sitemap", "Robots 与站点地图", "技术SEO",
              "请为该类型网站给出robots.txt与XML站点地图的推荐配置，并解释每条规则。",
              "robots.txt 与 sitemap 配置"),
        # 外链与本地
        _tool("backlink-strategy", "外链建设策略", "外链与本地",
              "请为该主题制定白帽外链建设策略，列出可获取外链的资源类型与外联话术要点。",
              "白帽外链方案"),
        _tool("local-seo", "本地SEO", "外链与本地",
              "请为该业务给出本地SEO优化建议，包括Google商家资料、本地引用与评价管理。",
              "商家资料与本地引用", "业务：{input}"),
        # 竞争与策略
        _tool("competitor-analysis", "竞争对手分析", "竞争与策略",
              "请识别该主题下排名靠前的竞争对手，分析其内容策略、优势与可被超越的弱点。",
              "排名靠前竞品的优劣势"),
        _tool("serp-features", "SERP 特性机会", "竞争与策略",
              "请分析该关键词搜索结果页中出现的特性（精选摘要、People Also Ask、视频、图片包等），并说明争取这些位置的方法。",
              "精选摘要等 SERP 位置", "关键词：{input}"),
        _tool("content-calendar", "内容日历规划", "竞争与策略",
              "请围绕该主题制定为期一个月的内容发布日历，每周包含选题、目标关键词与内容形式。",
              "一个月的选题排期"),
    ]


__all__ = ["CORE_TOOL_ID", "CATEGORY_ORDER", "build_catalog", "free_text_prompt"]
