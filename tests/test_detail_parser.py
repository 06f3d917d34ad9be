"""
Tests for mcpedl.parsers.detail_parser and mcpedl.parsers.download_parser.
"""
import os
import sys

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

import pytest

from mcpedl.errors import ExtractionError, MissingFieldError
from mcpedl.parsers.detail_parser import parse_detail_page
from mcpedl.parsers.download_parser import parse_download_table, parse_download_page


# ===================================================================
# Download table
# ===================================================================

class TestParseDownloadTable:
    def test_rows_with_unexpected_cell_count_skipped(self, sample_download_table_html):
        rows = parse_download_table(sample_download_table_html)
        assert [r.name for r in rows] == ['Furniture Pack', 'Texture Only']

    def test_three_cell_row_keeps_version(self, sample_download_table_html):
        row = parse_download_table(sample_download_table_html)[0]
        assert row.index == 1
        assert row.version == '1.2.0'
        assert len(row.files) == 2

    def test_two_cell_row_defaults_version(self, sample_download_table_html):
        row = parse_download_table(sample_download_table_html)[1]
        assert row.index == 2
        assert row.version == 'N/A'
        assert [f.id for f in row.files] == [1003]

    def test_file_fields(self, sample_download_table_html):
        first, second = parse_download_table(sample_download_table_html)[0].files
        assert first.index == 1
        assert first.type == 'Download .mcaddon'
        assert first.id == 1001
        assert first.meta_title == 'Furniture Addon'
        assert second.index == 2
        assert second.type == 'Download .zip'
        assert second.meta_title is None

    def test_version_cell_kept_verbatim(self):
        html = '''
        <div id="download-link"><table><tbody>
            <tr><td>Pack</td><td> 1.20 beta (preview) </td><td></td></tr>
        </tbody></table></div>
        '''
        row = parse_download_table(html)[0]
        assert row.version == '1.20 beta (preview)'
        assert row.files == []

    def test_row_with_empty_name_skipped_but_index_consumed(self):
        html = '''
        <div id="download-link"><table><tbody>
            <tr><td> </td><td><form action="/dw_file.php/1/"></form></td></tr>
            <tr><td>Real</td><td><form action="/dw_file.php/2/"></form></td></tr>
        </tbody></table></div>
        '''
        rows = parse_download_table(html)
        assert len(rows) == 1
        assert rows[0].index == 2

    def test_malformed_form_action_raises(self):
        html = '''
        <div id="download-link"><table><tbody>
            <tr><td>Pack</td><td><form action="/dw_file.php/abc/"><button>Download</button></form></td></tr>
        </tbody></table></div>
        '''
        with pytest.raises(ExtractionError):
            parse_download_table(html)

    def test_missing_form_action_raises(self):
        html = '''
        <div id="download-link"><table><tbody>
            <tr><td>Pack</td><td><form><button>Download</button></form></td></tr>
        </tbody></table></div>
        '''
        with pytest.raises(ExtractionError):
            parse_download_table(html)

    def test_no_table(self):
        assert parse_download_table('<html></html>') == []


# ===================================================================
# Download redirect page
# ===================================================================

class TestParseDownloadPage:
    def test_returns_first_link(self, sample_download_page_html):
        result = parse_download_page(sample_download_page_html)
        assert result.url == 'https://files.mcpedl.org/uploads/furniture.mcaddon'

    def test_missing_link_raises(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_download_page('<html><body>Expired</body></html>')
        assert exc_info.value.code == 'DOWNLOAD_URL_NOT_FOUND'

    def test_link_without_href_raises(self):
        with pytest.raises(MissingFieldError):
            parse_download_page('<a>no href</a>')


# ===================================================================
# Detail page
# ===================================================================

class TestParseDetailPage:
    def test_basic_fields(self, sample_detail_html):
        detail = parse_detail_page(sample_detail_html)
        assert detail.title == 'Furniture Addon'
        assert detail.img == 'https://mcpedl.org/img/furniture-cover.png'
        assert detail.rating.count == '120'
        assert detail.rating.value == '4.5'
        assert detail.comment == '15'
        assert detail.content == 'This addon adds over 100 pieces of furniture.'

    def test_header_info(self, sample_detail_html):
        info = parse_detail_page(sample_detail_html).info
        assert info['category'] == 'Addons'
        assert info['postDate'] == '2024-05-01T10:00:00+00:00'
        assert info['author'] == 'PostWriter'

    def test_post_date_falls_back_to_text(self):
        detail = parse_detail_page('<span class="date"> May 1, 2024 </span>')
        assert detail.info['postDate'] == 'May 1, 2024'

    def test_footer_label_in_div(self, sample_detail_html):
        info = parse_detail_page(sample_detail_html).info
        # Value is the last span
        assert info['supported_minecraft_versions'] == '1.21'

    def test_footer_label_as_bare_text(self, sample_detail_html):
        info = parse_detail_page(sample_detail_html).info
        assert info['file_size'] == '2 MB'

    def test_footer_bare_label_ignores_comments(self):
        html = '''
        <div class="entry-footer-column"><div class="entry-footer-content"><!-- size -->File size: <!--x--><span>2 MB</span></div></div>
        '''
        info = parse_detail_page(html).info
        assert info['file_size'] == '2 MB'
        assert not any('size_' in key for key in info)

    def test_footer_header_keys_not_copied(self, sample_detail_html):
        info = parse_detail_page(sample_detail_html).info
        assert 'publication_date' not in info
        assert 'categories' not in info
        assert info['author'] == 'PostWriter'

    def test_footer_game_author(self, sample_detail_html):
        info = parse_detail_page(sample_detail_html).info
        assert info['game_author'] == 'GameStudio'

    def test_footer_same_author_not_duplicated(self):
        html = '''
        <span class="meta-author-link"><span class="author">Same</span></span>
        <div class="entry-footer-column"><div class="entry-footer-content"><div>Author:</div><span>Same</span></div></div>
        '''
        info = parse_detail_page(html).info
        assert 'game_author' not in info

    def test_footer_without_value_skipped(self, sample_detail_html):
        info = parse_detail_page(sample_detail_html).info
        assert 'downloads' not in info

    def test_gallery_image_entry(self, sample_detail_html):
        gallery = parse_detail_page(sample_detail_html).gallery
        assert len(gallery) == 2
        image = gallery[0]
        assert image.type == 'image'
        assert image.img == 'https://mcpedl.org/img/shot-1.png'
        assert 'postTime' not in image.to_dict()

    def test_gallery_video_entry(self, sample_detail_html):
        video = parse_detail_page(sample_detail_html).gallery[1]
        assert video.type == 'video'
        assert video.img == 'https://img.youtube.com/vi/abc123/0.jpg'
        assert video.name == 'Furniture Trailer'
        assert video.post_time == '2024-04-28'
        assert video.duration is None
        assert video.video == 'https://www.youtube.com/embed/abc123'

    def test_gallery_video_without_meta(self):
        html = '''
        <div class="entry-gallery"><div><div>
            <div itemtype="https://schema.org/VideoObject"><img src="t.jpg"></div>
        </div></div></div>
        '''
        video = parse_detail_page(html).gallery[0]
        d = video.to_dict()
        assert d == {'type': 'video', 'img': 't.jpg', 'name': '', 'postTime': '',
                     'duration': None, 'video': None}

    def test_faq(self, sample_detail_html):
        faq = parse_detail_page(sample_detail_html).faq
        assert [q.question for q in faq] == ['How do I install it?', 'Does it work on Realms?']
        assert faq[0].answer == 'Open the .mcaddon file.'

    def test_download_list(self, sample_detail_html):
        detail = parse_detail_page(sample_detail_html)
        assert len(detail.list) == 2
        assert detail.get_file_ids() == [1001, 1002, 1003]

    def test_empty_page_defaults(self):
        detail = parse_detail_page('<html></html>')
        assert detail.title == ''
        assert detail.img == ''
        assert detail.info == {'category': '', 'postDate': '', 'author': ''}
        assert detail.gallery == []
        assert detail.faq == []
        assert detail.list == []
