"""
Reference catalogs served by the synthetic data sources.

These fixed records stand in for the customer-segment, campaign and insight
backends until real services exist. Records are kept as plain dictionaries and
validated into models on every load so each load cycle hands out fresh objects.
"""

from typing import Any, Dict, List, Tuple

from hermes_dashboard.models.schemas import Campaign, Insight, Segment


# Segment keys used by the time series and by campaign targeting, with the
# (low, high) range of daily visitors generated for each key.
SEGMENT_VISITOR_RANGES: Dict[str, Tuple[int, int]] = {
    'luxury-enthusiasts': (100, 300),
    'occasional-buyers': (150, 450),
    'high-value-customers': (75, 225),
}


SEGMENT_RECORDS: List[Dict[str, Any]] = [
    {
        'id': '1',
        'name': 'Luxury Enthusiasts',
        'description': 'High-income customers with strong preference for premium brands',
        'size': 2547,
        'avgLifetimeValue': 12500,
        'engagementRate': 78,
        'demographics': {
            'ageRange': '35-55',
            'income': '$150K+',
            'location': 'Urban Metro Areas',
            'interests': ['Fashion', 'Travel', 'Fine Dining', 'Art'],
        },
        'behavior': {
            'purchaseFrequency': 'Monthly',
            'preferredChannels': ['Email', 'Instagram', 'Website'],
            'avgOrderValue': 850,
        },
        'color': '#8B5CF6',
    },
    {
        'id': '2',
        'name': 'Occasional Buyers',
        'description': 'Price-conscious customers who purchase during sales and promotions',
        'size': 8934,
        'avgLifetimeValue': 3200,
        'engagementRate': 45,
        'demographics': {
            'ageRange': '25-45',
            'income': '$50K-$100K',
            'location': 'Suburban Areas',
            'interests': ['Fashion', 'Deals', 'Social Media'],
        },
        'behavior': {
            'purchaseFrequency': 'Quarterly',
            'preferredChannels': ['Email', 'SMS', 'Social Media'],
            'avgOrderValue': 180,
        },
        'color': '#06B6D4',
    },
    {
        'id': '3',
        'name': 'High-Value VIPs',
        'description': 'Ultra-high net worth individuals with exclusive purchasing patterns',
        'size': 456,
        'avgLifetimeValue': 45000,
        'engagementRate': 92,
        'demographics': {
            'ageRange': '45-65',
            'income': '$500K+',
            'location': 'Global Elite',
            'interests': ['Luxury Travel', 'Fine Art', 'Exclusive Events', 'Investment'],
        },
        'behavior': {
            'purchaseFrequency': 'Weekly',
            'preferredChannels': ['Personal Concierge', 'Private Events', 'Phone'],
            'avgOrderValue': 2500,
        },
        'color': '#F59E0B',
    },
]


CAMPAIGN_RECORDS: List[Dict[str, Any]] = [
    {
        'id': '1',
        'name': 'Spring Luxury Collection Launch',
        'status': 'active',
        'startDate': '2024-03-01',
        'endDate': '2024-04-30',
        'budget': 150000,
        'spent': 89000,
        'reach': 245000,
        'engagement': 18500,
        'conversions': 1250,
        'roi': 3.2,
        'channels': ['Instagram', 'Email', 'Influencer'],
        'targetSegments': ['luxury-enthusiasts', 'high-value-customers'],
    },
    {
        'id': '2',
        'name': 'Summer Sale Campaign',
        'status': 'completed',
        'startDate': '2024-06-01',
        'endDate': '2024-07-15',
        'budget': 75000,
        'spent': 73000,
        'reach': 450000,
        'engagement': 32000,
        'conversions': 2100,
        'roi': 4.1,
        'channels': ['Email', 'SMS', 'Social Media'],
        'targetSegments': ['occasional-buyers'],
    },
    {
        'id': '3',
        'name': 'VIP Exclusive Preview',
        'status': 'active',
        'startDate': '2024-07-20',
        'endDate': '2024-08-20',
        'budget': 50000,
        'spent': 12000,
        'reach': 15000,
        'engagement': 8900,
        'conversions': 156,
        'roi': 8.7,
        'channels': ['Personal Concierge', 'Private Events'],
        'targetSegments': ['high-value-customers'],
    },
]


# Most recent first, as the insight generator emits them
INSIGHT_RECORDS: List[Dict[str, Any]] = [
    {
        'id': '1',
        'type': 'opportunity',
        'title': 'Emerging Trend: Sustainable Luxury',
        'description': (
            'Customer sentiment analysis shows 73% increased interest in sustainable '
            'luxury products among high-value segments.'
        ),
        'impact': 'high',
        'confidence': 92,
        'category': 'Market Trends',
        'actionable': True,
        'createdAt': '2024-07-15T10:30:00Z',
        'metadata': {
            'trend_growth': '45%',
            'segment_impact': ['luxury-enthusiasts', 'high-value-customers'],
        },
    },
    {
        'id': '2',
        'type': 'risk',
        'title': 'Declining Engagement in Millennial Segment',
        'description': 'Engagement rates have dropped 15% in the 28-35 age group over the past quarter.',
        'impact': 'medium',
        'confidence': 87,
        'category': 'Customer Behavior',
        'actionable': True,
        'createdAt': '2024-07-14T15:45:00Z',
        'metadata': {'engagement_drop': '15%', 'affected_segment': 'millennial-luxury'},
    },
    {
        'id': '3',
        'type': 'recommendation',
        'title': 'Optimize Email Send Times',
        'description': (
            'Analysis suggests sending emails at 2 PM on Tuesdays could increase '
            'open rates by 23%.'
        ),
        'impact': 'medium',
        'confidence': 85,
        'category': 'Campaign Optimization',
        'actionable': True,
        'createdAt': '2024-07-13T09:20:00Z',
        'metadata': {'optimal_time': '2PM Tuesday', 'potential_increase': '23%'},
    },
]


def build_segments() -> List[Segment]:
    """Validate the segment catalog into Segment models."""
    return [Segment.model_validate(record) for record in SEGMENT_RECORDS]


def build_campaigns() -> List[Campaign]:
    """Validate the campaign catalog into Campaign models."""
    return [Campaign.model_validate(record) for record in CAMPAIGN_RECORDS]


def build_insights() -> List[Insight]:
    """Validate the insight catalog into Insight models, preserving order."""
    return [Insight.model_validate(record) for record in INSIGHT_RECORDS]
