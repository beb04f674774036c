from __future__ import annotations

import json
import tempfile
import textwrap
from pathlib import Path

from django.template import Context, Template
from django.test import SimpleTestCase, override_settings

from sitekit import registry
from sitekit.engine.types import AnalyticsRecord, Page
from sitekit.exceptions import DataFileError, EmptyCollectionError
from sitekit.services import (
    build_context_from_settings,
    get_build_context,
    load_analytics,
    load_block_list,
    load_json,
    load_page,
    mention_store_from_payload,
    reset_build_context,
    split_front_matter,
)

TARGET = 'https://www.example.com/web/post/'


def mention(source: str, kind: str = 'like-of', received: str = '2024-01-01T00:00:00Z', **extra):
    record = {
        'wm-property': kind,
        'url': source,
        'wm-target': TARGET,
        'wm-received': received,
    }
    record.update(extra)
    return record


class DataDirMixin:
    def setUp(self) -> None:
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)
        reset_build_context()

    def tearDown(self) -> None:
        reset_build_context()
        self._tmp.cleanup()
        super().tearDown()

    def write_json(self, name: str, payload) -> Path:
        path = self.data_dir / name
        path.write_text(json.dumps(payload), encoding='utf-8')
        return path


class DataFileTests(DataDirMixin, SimpleTestCase):
    def test_missing_file_returns_default(self) -> None:
        self.assertEqual(load_json(self.data_dir / 'absent.json', []), [])

    def test_malformed_file_raises(self) -> None:
        path = self.data_dir / 'broken.json'
        path.write_text('{"mentions": ', encoding='utf-8')
        with self.assertRaises(DataFileError):
            load_json(path, {})

    def test_block_list_must_be_an_array(self) -> None:
        with self.assertRaises(DataFileError):
            load_block_list(self.write_json('webmentionsBlockList.json', {'spam': True}))

    def test_block_list_drops_blank_entries(self) -> None:
        path = self.write_json('webmentionsBlockList.json', ['spam.example', '', '  ', ' bad.example '])
        self.assertEqual(load_block_list(path), ('spam.example', 'bad.example'))

    def test_analytics_keeps_numeric_metrics(self) -> None:
        path = self.write_json('analytics.json', {
            '/web/a/': {'rankPerDaysPosted': 3, 'rankTotal': '10'},
            '/web/b/': {'rankPerDaysPosted': 'lots'},
            '/web/c/': 'not a record',
        })
        analytics = load_analytics(path)
        self.assertEqual(analytics['/web/a/'], AnalyticsRecord(3.0, 10.0))
        self.assertEqual(analytics['/web/b/'], AnalyticsRecord(None, None))
        self.assertNotIn('/web/c/', analytics)

    def test_mention_store_skips_records_without_received_time(self) -> None:
        payload = {'mentions': {
            'http://WWW.example.com/web/post': [
                mention('https://a.example/'),
                mention('https://b.example/', received='whenever'),
                'garbage',
            ],
            TARGET: [mention('https://c.example/', kind='repost-of')],
        }}
        with self.assertLogs('sitekit.services', level='WARNING') as logs:
            store = mention_store_from_payload(payload)
        self.assertEqual(len(logs.output), 2)
        self.assertEqual(len(store), 2)
        self.assertEqual(list(store.mentions), [TARGET.rstrip('/')])

    def test_mention_store_skips_targets_whose_records_are_not_a_list(self) -> None:
        payload = {'mentions': {
            'https://x.example/a/': 5,
            'https://x.example/b/': None,
            TARGET: [mention('https://a.example/')],
        }}
        with self.assertLogs('sitekit.services', level='WARNING') as logs:
            store = mention_store_from_payload(payload)
        self.assertEqual(len(logs.output), 2)
        self.assertEqual(len(store), 1)
        self.assertEqual(store.mentions_for('https://x.example/a/'), ())

    def test_mention_store_without_mentions_key_is_empty(self) -> None:
        self.assertEqual(len(mention_store_from_payload({'type': 'feed'})), 0)
        self.assertEqual(len(mention_store_from_payload([])), 0)


class FrontMatterTests(DataDirMixin, SimpleTestCase):
    def test_split_front_matter(self) -> None:
        source = textwrap.dedent(
            """\
            ---
            title: Hello
            tags: [css, draft]
            ---
            Body text
            """
        )
        data, body = split_front_matter(source)
        self.assertEqual(data, {'title': 'Hello', 'tags': ['css', 'draft']})
        self.assertEqual(body, 'Body text\n')

    def test_document_without_front_matter(self) -> None:
        self.assertEqual(split_front_matter('Just text'), ({}, 'Just text'))

    def test_front_matter_must_be_a_mapping(self) -> None:
        with self.assertRaises(DataFileError):
            split_front_matter('---\n- a\n- b\n---\n')

    def test_load_page(self) -> None:
        path = self.data_dir / '_posts' / '2020-02-02-hello.md'
        path.parent.mkdir()
        path.write_text(
            '---\ndate: 2020-02-02\ntags: speaking\npermalink: /web/hello/\n---\nHi\n',
            encoding='utf-8',
        )
        page = load_page(path, '/web/hello/')
        self.assertEqual(page.tags, frozenset({'speaking'}))
        self.assertEqual(page.permalink, '/web/hello/')
        self.assertEqual(page.date.year, 2020)
        self.assertTrue(page.input_path.endswith('_posts/2020-02-02-hello.md'))

    def test_load_page_with_invalid_yaml(self) -> None:
        path = self.data_dir / 'bad.md'
        path.write_text('---\ntitle: [unclosed\n---\n', encoding='utf-8')
        with self.assertRaises(DataFileError):
            load_page(path, '/bad/')


class BuildContextTests(DataDirMixin, SimpleTestCase):
    def test_context_is_read_from_settings(self) -> None:
        self.write_json('webmentions.json', {'mentions': {TARGET: [mention('https://a.example/')]}})
        self.write_json('webmentionsBlockList.json', ['spam.example'])
        self.write_json('analytics.json', {'/web/post/': {'rankTotal': 4}})

        with override_settings(SITEKIT_DATA_DIR=self.data_dir, SITEKIT_PRODUCTION=True):
            context = build_context_from_settings()

        self.assertTrue(context.production)
        self.assertEqual(len(context.mentions), 1)
        self.assertEqual(context.block_list, ('spam.example',))
        self.assertEqual(context.analytics['/web/post/'].rank_total, 4.0)

    def test_missing_data_dir_gives_empty_inputs(self) -> None:
        with override_settings(SITEKIT_DATA_DIR=self.data_dir / 'nowhere'):
            context = build_context_from_settings()
        self.assertEqual(len(context.mentions), 0)
        self.assertEqual(context.block_list, ())
        self.assertEqual(len(context.analytics), 0)

    def test_engine_config_file_is_merged(self) -> None:
        config_path = self.data_dir / 'sitekit.yaml'
        config_path.write_text('popular_limit: 2\n', encoding='utf-8')
        with override_settings(SITEKIT_DATA_DIR=self.data_dir, SITEKIT_ENGINE_CONFIG=config_path):
            self.assertEqual(build_context_from_settings().config.popular_limit, 2)

    def test_settings_change_resets_cached_context(self) -> None:
        with override_settings(SITEKIT_DATA_DIR=self.data_dir, SITEKIT_PRODUCTION=False):
            first = get_build_context()
            self.assertIs(get_build_context(), first)
        with override_settings(SITEKIT_DATA_DIR=self.data_dir, SITEKIT_PRODUCTION=True):
            self.assertTrue(get_build_context().production)


class TemplateTagTests(DataDirMixin, SimpleTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.write_json('webmentions.json', {'mentions': {TARGET: [
            mention('https://a.example/note', received='2024-01-03T00:00:00Z'),
            mention('https://a.example/note', received='2024-01-04T00:00:00Z'),
            mention('https://spam.example/x', received='2024-01-02T00:00:00Z'),
            mention('https://b.example/', received='2024-01-05T00:00:00Z', published='2024-01-01T00:00:00Z'),
            mention('https://c.example/', kind='in-reply-to', received='2024-01-01T00:00:00Z'),
        ]}})
        self.write_json('webmentionsBlockList.json', ['spam.example'])
        self.write_json('analytics.json', {
            '/web/low/': {'rankPerDaysPosted': 1, 'rankTotal': 50},
            '/web/high/': {'rankPerDaysPosted': 9, 'rankTotal': 5},
        })
        self.settings_override = override_settings(SITEKIT_DATA_DIR=self.data_dir, SITEKIT_PRODUCTION=False)
        self.settings_override.enable()

    def tearDown(self) -> None:
        self.settings_override.disable()
        super().tearDown()

    def render(self, source: str, **context) -> str:
        return Template(source).render(Context(context))

    def test_webmentions_for_url_filters_dedupes_and_sorts(self) -> None:
        rendered = self.render(
            '{% webmentions_for_url url "like-of,repost-of" as likes %}'
            '{% for like in likes %}{{ like.source_url }};{% endfor %}',
            url='http://www.example.com/web/post',
        )
        self.assertEqual(rendered, 'https://b.example/;https://a.example/note;')

    def test_webmentions_for_url_defaults_to_all_kinds(self) -> None:
        rendered = self.render('{% webmentions_for_url url as all %}{{ all|length }}', url=TARGET)
        self.assertEqual(rendered, '3')

    def test_webmention_is_type_filter(self) -> None:
        rendered = self.render(
            '{% webmentions_for_url url as all %}'
            '{% for m in all %}{% if m|webmention_is_type:"in-reply-to" %}{{ m.source_url }}{% endif %}{% endfor %}',
            url=TARGET,
        )
        self.assertEqual(rendered, 'https://c.example/')

    def test_popular_posts(self) -> None:
        pages = [Page(url='/web/low/'), Page(url='/web/high/'), Page(url='/web/unranked/')]
        source = '{% popular_posts pages metric as ranked %}{% for p in ranked %}{{ p.url }} {% endfor %}'
        self.assertEqual(self.render(source, pages=pages, metric='rankPerDaysPosted'), '/web/high/ /web/low/ ')
        self.assertEqual(self.render(source, pages=pages, metric='rankTotal'), '/web/low/ /web/high/ ')

    def test_html_filters_are_not_escaped(self) -> None:
        rendered = self.render('{{ content|sanitize_html }}', content='<b>hi</b><script>x()</script>')
        self.assertEqual(rendered, '<b>hi</b>')
        self.assertEqual(self.render('{{ word|emoji }}', word='🎈'), '<span aria-hidden="true" class="emoji">🎈</span>')

    def test_markup_filters_escape_untrusted_input(self) -> None:
        rendered = self.render(
            '{{ v|emoji }}|{{ v|truncate:50 }}|{{ v|orphan_wrap }}|{{ v|long_word_wrap }}',
            v='<script>x()</script> a',
        )
        self.assertNotIn('<script>', rendered)
        self.assertTrue(rendered.startswith(
            '<span aria-hidden="true" class="emoji">&lt;script&gt;x()&lt;/script&gt; a</span>|'
        ))

    def test_markup_filters_respect_safe_input_and_autoescape_off(self) -> None:
        self.assertEqual(
            self.render('{{ v|safe|emoji }}', v='<b>ok</b>'),
            '<span aria-hidden="true" class="emoji"><b>ok</b></span>',
        )
        self.assertEqual(
            self.render('{% autoescape off %}{{ v|emoji }}{% endautoescape %}', v='<b>ok</b>'),
            '<span aria-hidden="true" class="emoji"><b>ok</b></span>',
        )

    def test_sentiment_value_follows_build_mode(self) -> None:
        source = '{% if reply|sentiment_value < -0.07 %}hostile{% else %}calm{% endif %}'
        self.assertEqual(self.render(source, reply='this is terrible'), 'calm')
        with override_settings(SITEKIT_PRODUCTION=True):
            self.assertEqual(self.render(source, reply='this is terrible'), 'hostile')
        self.assertEqual(self.render('{{ reply|random_case:0.5 }}', reply='fine'), 'fine')

    def test_plain_filters_are_escaped(self) -> None:
        self.assertEqual(self.render('{{ n|leftpad:4 }}', n=7), '0007')
        self.assertEqual(self.render('{{ text|remove_newlines }}', text='<a>\n'), '&lt;a&gt;')

    def test_url_filters_use_site_url(self) -> None:
        self.assertEqual(
            self.render('{{ path|absolute_url }}', path='/web/x/'),
            'https://www.example.com/web/x/',
        )
        self.assertEqual(
            self.render('{{ url|local_url }}', url='https://www.example.com/web/x/'),
            '/web/x/',
        )

    def test_filter_categories(self) -> None:
        page = Page(url='/web/x/', input_path='./_posts/x.md', tags=frozenset({'speaking'}))
        self.assertEqual(self.render('{{ page|filter_categories }}', page=page), 'speaking')

    def test_rss_newest_updated_date_refuses_empty_collection(self) -> None:
        with self.assertRaises(EmptyCollectionError):
            self.render('{{ posts|rss_newest_updated_date }}', posts=[])

    def test_youtube_and_avatar_tags(self) -> None:
        rendered = self.render('{% youtube_embed "abc" "15" "Talk" %}')
        self.assertIn('videoid="abc"', rendered)
        self.assertIn('/web/dist/1.0.0/lite-yt-embed.js', rendered)
        avatar = self.render('{% indie_avatar_bare "https://a.example/deep/" %}')
        self.assertIn('v1.indieweb-avatar.11ty.dev/https%3A%2F%2Fa.example/', avatar)


class RegistryTests(SimpleTestCase):
    def test_duplicate_names_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            registry.register('leftpad', str)

    def test_markup_filters_are_flagged(self) -> None:
        self.assertTrue(registry.FILTERS['sanitize_html'].html)
        self.assertFalse(registry.FILTERS['leftpad'].html)
        self.assertTrue(registry.FILTERS['emoji'].autoescape)
        self.assertFalse(registry.FILTERS['sanitize_html'].autoescape)
        self.assertIs(registry.get_filter('head'), registry.FILTERS['head'].func)
