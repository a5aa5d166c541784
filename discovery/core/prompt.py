"""Instruction templates sent to the generation model.

Each template embeds the JSON layout the model must answer with. The builders
only interpolate caller values; they never inspect or validate them.
"""

from __future__ import annotations

from string import Template
from typing import Mapping, Optional, Sequence


RECOMMENDATION_TEMPLATE = Template(
    """Act as an expert AI tools researcher and consultant. Based on this user request: "$user_prompt"

Please research and recommend the BEST AI tools available globally that can solve this problem. Consider tools from all major providers: OpenAI, Google, Microsoft, Meta, Anthropic, Stability AI, Midjourney, RunwayML, ElevenLabs, Jasper, Copy.ai, and other emerging AI companies.

Return your response in this EXACT JSON format:
{
  "userIntent": {
    "problem": "clear description of what user wants to solve",
    "category": "primary AI category needed",
    "useCase": "specific use case",
    "techLevel": "beginner/intermediate/advanced",
    "budget": "estimated budget range or free"
  },
  "recommendations": [
    {
      "name": "Tool Name",
      "vendor": "Company Name",
      "description": "Detailed description of what this tool does and why it's perfect for this use case",
      "categories": ["Primary Category", "Secondary Category"],
      "useCases": ["Specific Use Case 1", "Use Case 2", "Use Case 3"],
      "pricing": {
        "hasFreeTier": true/false,
        "startingPrice": number,
        "pricingModel": "subscription/pay-per-use/one-time",
        "freeCredits": "description of free offering"
      },
      "features": ["Key Feature 1", "Feature 2", "Feature 3", "Feature 4"],
      "pros": ["Major Advantage 1", "Advantage 2", "Advantage 3"],
      "cons": ["Limitation 1", "Limitation 2"],
      "matchScore": number (70-100),
      "reasoning": "Detailed explanation why this tool is perfect for their specific need",
      "bestFor": "What this tool excels at for their use case",
      "gettingStarted": "Step-by-step guide to get started",
      "apiAvailable": true/false,
      "rating": number (4.0-5.0),
      "reviewsCount": estimated_number,
      "responseTime": "typical response time",
      "website": "official website URL",
      "alternatives": ["Alternative Tool 1", "Alternative 2"]
    }
  ],
  "summary": "Comprehensive analysis of the AI landscape for this problem",
  "marketAnalysis": "Current state of AI tools in this category",
  "trendingTools": ["Tool gaining popularity", "Emerging solution"],
  "budgetBreakdown": "Detailed cost analysis and recommendations",
  "implementationStrategy": "Step-by-step plan to implement these AI solutions",
  "futureConsiderations": "What to watch for in this AI space"
}

Requirements:
- Recommend 3-5 REAL, currently available AI tools
- Include both well-known and emerging tools
- Provide accurate, up-to-date information
- Consider different budget levels (free, affordable, premium)
- Include specific websites and getting started guides
- Focus on tools that are actively maintained and have good user reviews
- Consider the user's technical level and specific requirements

BE COMPREHENSIVE and provide tools that actually exist and are currently available. Include pricing information, features, and real websites.
"""
)

TOOL_DETAILS_TEMPLATE = Template(
    """Provide comprehensive, up-to-date information about the AI tool: "$tool_name"

Return detailed information in this JSON format:
{
  "name": "Official tool name",
  "vendor": "Company name",
  "description": "Detailed description of capabilities",
  "categories": ["Category 1", "Category 2"],
  "useCases": ["Use case 1", "Use case 2", "Use case 3"],
  "pricing": {
    "hasFreeTier": true/false,
    "plans": [
      {
        "name": "Plan name",
        "price": number,
        "features": ["feature 1", "feature 2"],
        "limits": "usage limits"
      }
    ]
  },
  "features": ["Feature 1", "Feature 2", "Feature 3"],
  "pros": ["Advantage 1", "Advantage 2"],
  "cons": ["Limitation 1", "Limitation 2"],
  "technicalDetails": {
    "apiAvailable": true/false,
    "integrations": ["Platform 1", "Platform 2"],
    "supportedFormats": ["Format 1", "Format 2"]
  },
  "userReviews": {
    "rating": number,
    "reviewCount": number,
    "commonPraise": ["What users love"],
    "commonComplaints": ["Common issues"]
  },
  "gettingStarted": {
    "steps": ["Step 1", "Step 2", "Step 3"],
    "timeToFirstResult": "estimated time",
    "learningCurve": "beginner/intermediate/advanced"
  },
  "website": "official website",
  "documentation": "documentation URL",
  "community": "community/support channels",
  "lastUpdated": "recent update info",
  "alternatives": ["Alternative 1", "Alternative 2"]
}

Provide REAL, accurate, current information only.
"""
)

CATEGORY_TEMPLATE = Template(
    """Research and list the top AI tools in the "$category" category. Include both popular and emerging tools.

Return in this JSON format:
{
  "category": "$category",
  "overview": "Brief overview of this AI category",
  "marketSize": "Information about market size and growth",
  "tools": [
    {
      "name": "Tool Name",
      "vendor": "Company",
      "description": "Brief description",
      "pricing": "Pricing info",
      "popularity": "High/Medium/Low",
      "website": "URL",
      "keyFeatures": ["Feature 1", "Feature 2"]
    }
  ],
  "trends": "Current trends in this category",
  "futureOutlook": "Where this category is heading"
}

Include 5-10 real tools that are currently available.
"""
)

INSIGHTS_PROMPT = """Provide current insights about the AI tools industry, trends, and market analysis.

Return in this JSON format:
{
  "marketOverview": {
    "totalTools": "estimated number",
    "marketValue": "current market size",
    "growthRate": "annual growth rate",
    "keyPlayers": ["Company 1", "Company 2", "Company 3"]
  },
  "trendingCategories": [
    {
      "category": "Category name",
      "growth": "growth percentage",
      "description": "why it's trending",
      "examples": ["Tool 1", "Tool 2"]
    }
  ],
  "emergingTools": [
    {
      "name": "Tool name",
      "category": "Category",
      "whyTrending": "Reason for popularity",
      "potential": "Future potential"
    }
  ],
  "investmentTrends": "Where money is flowing",
  "userAdoptionTrends": "How users are adopting AI",
  "futureOutlook": "Predictions for next 12 months",
  "recommendations": "What to watch for"
}

Provide current, accurate market intelligence.
"""

COMPARISON_TEMPLATE = Template(
    """Compare these AI tools in detail: $tool_list

Provide a comprehensive comparison in this JSON format:
{
  "comparison": {
    "tools": [$quoted_tools],
    "categories": "Common categories they serve",
    "overview": "Brief comparison overview"
  },
  "detailedComparison": [
    {
      "aspect": "Pricing",
      "analysis": {
$pricing_analysis
      }
    },
    {
      "aspect": "Features",
      "analysis": {
$feature_analysis
      }
    },
    {
      "aspect": "Ease of Use",
      "analysis": {
$usability_analysis
      }
    },
    {
      "aspect": "Performance",
      "analysis": {
$performance_analysis
      }
    }
  ],
  "recommendations": {
    "bestFor": {
$best_for
    },
    "winner": "Overall recommendation with reasoning"
  },
  "summary": "Detailed comparison summary and final recommendations"
}
"""
)

SEARCH_FILTER_LABELS = (
    ("budget", "Budget"),
    ("category", "Category"),
    ("techLevel", "Technical Level"),
)


def recommendation_prompt(user_prompt: str) -> str:
    return RECOMMENDATION_TEMPLATE.substitute(user_prompt=user_prompt)


def tool_details_prompt(tool_name: str) -> str:
    return TOOL_DETAILS_TEMPLATE.substitute(tool_name=tool_name)


def category_prompt(category: str) -> str:
    return CATEGORY_TEMPLATE.substitute(category=category)


def insights_prompt() -> str:
    return INSIGHTS_PROMPT


def _per_tool_entries(tools: Sequence[str], value: str, indent: str) -> str:
    return ",\n".join(f'{indent}"{tool}": "{value}"' for tool in tools)


def comparison_prompt(tools: Sequence[str]) -> str:
    """Build the comparison instruction with one analysis key per tool."""
    analysis_indent = " " * 8
    return COMPARISON_TEMPLATE.substitute(
        tool_list=", ".join(tools),
        quoted_tools=", ".join(f'"{tool}"' for tool in tools),
        pricing_analysis=_per_tool_entries(tools, "pricing analysis", analysis_indent),
        feature_analysis=_per_tool_entries(tools, "feature analysis", analysis_indent),
        usability_analysis=_per_tool_entries(tools, "usability analysis", analysis_indent),
        performance_analysis=_per_tool_entries(tools, "performance analysis", analysis_indent),
        best_for=_per_tool_entries(tools, "what this tool is best for", " " * 6),
    )


def search_query(query: str, filters: Optional[Mapping[str, object]] = None) -> str:
    """Fold search filters into the free-text request used for recommendations."""
    text = f'Search for AI tools related to: "{query}"'
    for key, label in SEARCH_FILTER_LABELS:
        value = (filters or {}).get(key)
        if value:
            text += f" {label}: {value}"
    return text
