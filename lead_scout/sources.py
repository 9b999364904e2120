# lead_scout/sources.py
"""
Built-in site registry and keyword sets.

Order of TARGET_SITES is the batch order used by the scheduler.
"""
from typing import Tuple

from .models import SourceConfig

TARGET_SITES: Tuple[SourceConfig, ...] = (
    SourceConfig(
        name='TikTok',
        url='https://www.tiktok.com/search?q=cybercafe%20services',
        wait_for_selector='.tiktok-x6y88p-DivItemContainer',
        item_selector='.tiktok-x6y88p-DivItemContainer',
        text_selector='.tiktok-j2a19r-SpanText',
        link_selector='a',
        scroll_to_load=True,
        max_items=20,
    ),
    SourceConfig(
        name='Facebook',
        url='https://www.facebook.com/search/posts?q=cybercafe%20services',
        wait_for_selector='[role="article"]',
        item_selector='[role="article"]',
        text_selector='.kvgmc6g5',
        link_selector='a[href*="/posts/"]',
        scroll_to_load=True,
        max_items=15,
        needs_login=True,
    ),
    SourceConfig(
        name='X (Twitter)',
        url=(
            'https://twitter.com/search?q=cybercafe%20services%20OR%20internet%20services'
            '%20OR%20kuccps%20OR%20ecitizen%20OR%20kra%20services&f=live'
        ),
        wait_for_selector='[data-testid="tweet"]',
        item_selector='[data-testid="tweet"]',
        text_selector='[data-testid="tweetText"]',
        link_selector='a[href*="/status/"]',
        scroll_to_load=True,
        max_items=25,
    ),
    SourceConfig(
        name='Instagram',
        url='https://www.instagram.com/explore/tags/cybercafe/',
        wait_for_selector='article',
        item_selector='article',
        text_selector='.C4VMK span',
        link_selector='a[href*="/p/"]',
        scroll_to_load=True,
        max_items=15,
        needs_login=True,
    ),
    SourceConfig(
        name='Reddit',
        url=(
            'https://www.reddit.com/search/?q=cyber%20cafe%20OR%20ecitizen%20OR%20kra%20services'
            '%20OR%20passport%20application&type=post&sort=new'
        ),
        wait_for_selector='[data-testid="post-container"]',
        item_selector='[data-testid="post-container"]',
        text_selector='[data-testid="post-title"]',
        link_selector='a[data-testid="post-title"]',
        scroll_to_load=True,
        max_items=20,
    ),
    SourceConfig(
        name='OLX Kenya',
        url='https://www.olx.co.ke/items/q-cyber-cafe-services',
        wait_for_selector='[data-aut-id="itemTitle"]',
        item_selector='[data-aut-id="itemBox"]',
        text_selector='[data-aut-id="itemTitle"]',
        link_selector='a',
        scroll_to_load=True,
        max_items=15,
    ),
    SourceConfig(
        name='Jiji Kenya',
        url='https://jiji.co.ke/search?query=cyber%20cafe%20services',
        wait_for_selector='.b-list-advert__item-wrapper',
        item_selector='.b-list-advert__item-wrapper',
        text_selector='.qa-advert-title',
        link_selector='a',
        scroll_to_load=True,
        max_items=15,
    ),
)

# Cyber cafe / e-government services vocabulary
INCLUDE_KEYWORDS: Tuple[str, ...] = (
    'cyber service', 'cybercafe', 'online application', 'internet service',
    'digital service', 'kuccps', 'kra services', 'kra pin', 'ntsa services',
    'passport application', 'ecitizen', 'huduma', 'helb', 'tsc', 'nemis',
    'sha', 'nssf', 'driving license', 'business registration', 'tax returns',
    'cyber', 'online services', 'internet cafe', 'digital documents', 'scanning',
    'certification', 'government services', 'e-services', 'shif', 'good conduct',
    'crb clearance', 'cv', 'cover letter', 'visa application', 'flight booking',
    'business cards', 'logo', 'birth certificate', 'kra pin retrieval', 'company registration',
    'eacc clearance', 'websites creation', 'computer training', 'digital applications',
)

EXCLUDE_KEYWORDS: Tuple[str, ...] = (
    'printing', 'computer repair', 'laptop repair', 'ink cartridge', 'toner',
    'photocopy', 'photocopying', 'gaming', 'gaming zone',
)
