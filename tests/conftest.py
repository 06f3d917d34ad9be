"""
Pytest configuration and fixtures for MCPEDL client tests.
"""
import os
import sys

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

import pytest
import tempfile
import shutil
from unittest.mock import MagicMock


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_response():
    """Factory for fake ``requests.Response`` objects."""
    def _make(status_code=200, text='<html></html>'):
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        response.content = text.encode()
        return response
    return _make


@pytest.fixture
def sample_search_html():
    """Search page with three linked entries, one unlinked entry and a
    "next" link."""
    return '''
    <html>
    <head><title>Search results for furniture - MCPEDL</title></head>
    <body>
        <div class="entries">
            <div class="g-grid">
                <div class="g-block">
                    <article>
                        <section>
                            <a href="https://mcpedl.org/furniture-addon/"><img src="https://mcpedl.org/img/furniture.png"></a>
                            <h2><a href="https://mcpedl.org/furniture-addon/"> Furniture Addon </a></h2>
                            <div class="rating-wrapper"><span> 4.5 </span></div>
                        </section>
                    </article>
                </div>
                <div class="g-block">
                    <article>
                        <section>
                            <a href="https://mcpedl.org/modern-kitchen/"><img src="https://mcpedl.org/img/kitchen.png"></a>
                            <h2><a href="https://mcpedl.org/modern-kitchen/">Modern Kitchen</a></h2>
                            <div class="rating-wrapper"><span>3.9</span></div>
                        </section>
                    </article>
                </div>
                <div class="g-block">
                    <article>
                        <section>
                            <a href="https://mcpedl.org/chairs-pack/"></a>
                            <h2><a href="https://mcpedl.org/chairs-pack/">Chairs Pack</a></h2>
                        </section>
                    </article>
                </div>
                <div class="g-block">
                    <article>
                        <section>
                            <h2>Sponsored</h2>
                        </section>
                    </article>
                </div>
            </div>
        </div>
        <nav class="pagination">
            <a class="page-numbers" href="https://mcpedl.org/page/1/?s=furniture">1</a>
            <a class="next page-numbers" href="https://mcpedl.org/page/3/?s=furniture">Next</a>
        </nav>
    </body>
    </html>
    '''


@pytest.fixture
def sample_latest_html():
    """"Latest downloads" page with two quick downloads (plus one without
    a link) and two grid entries."""
    return '''
    <html>
    <body>
        <div class="archive">
            <div class="dwbuttonslist">
                <div style="border: 1px solid #3c8527; padding: 8px">
                    <a href="/minecraft-1-21-50/"><span style="font-weight: 900">Minecraft 1.21.50</span></a>
                    <form action="https://mcpedl.org/dw_file.php/4821/" method="post"><button>Download</button></form>
                </div>
                <div style="border: 1px solid #3c8527; padding: 8px">
                    <a href="/minecraft-1-21-44/"><span style="font-weight: 900">Minecraft 1.21.44</span></a>
                    <form action="https://mcpedl.org/dw_file.php/4790/" method="post"><button>Download</button></form>
                </div>
                <div style="border: 1px solid #999">
                    <span style="font-weight: 900">Coming soon</span>
                </div>
            </div>
        </div>
        <div class="entries">
            <div class="g-grid">
                <div class="g-block">
                    <article>
                        <section>
                            <a href="https://mcpedl.org/minecraft-1-21-50/"><img src="https://mcpedl.org/img/12150.png"></a>
                            <h2><a href="https://mcpedl.org/minecraft-1-21-50/">Minecraft 1.21.50</a></h2>
                            <div class="rating-wrapper"><span>4.8</span></div>
                        </section>
                    </article>
                </div>
                <div class="g-block">
                    <article>
                        <section>
                            <a href="https://mcpedl.org/minecraft-1-21-44/"><img src="https://mcpedl.org/img/12144.png"></a>
                            <h2><a href="https://mcpedl.org/minecraft-1-21-44/">Minecraft 1.21.44</a></h2>
                            <div class="rating-wrapper"><span>4.6</span></div>
                        </section>
                    </article>
                </div>
            </div>
        </div>
    </body>
    </html>
    '''


@pytest.fixture
def sample_download_table_html():
    """Download table with a 3-cell row, a 2-cell row and a 1-cell note."""
    return '''
    <section id="download-link">
        <table>
            <tbody>
                <tr>
                    <td>Furniture Pack</td>
                    <td>1.2.0</td>
                    <td>
                        <form action="https://mcpedl.org/dw_file.php/1001/" method="post">
                            <input type="hidden" name="post_title" value="Furniture Addon">
                            <button type="submit">  Download
                                .mcaddon  </button>
                        </form>
                        <form action="https://mcpedl.org/dw_file.php/1002/" method="post">
                            <button type="submit">Download .zip</button>
                        </form>
                    </td>
                </tr>
                <tr>
                    <td>Texture Only</td>
                    <td>
                        <form action="/dw_file.php/1003/" method="post">
                            <button type="submit">Download</button>
                        </form>
                    </td>
                </tr>
                <tr>
                    <td colspan="3">Requires experimental gameplay</td>
                </tr>
            </tbody>
        </table>
    </section>
    '''


@pytest.fixture
def sample_detail_html(sample_download_table_html):
    """Full post page with header meta, footer pairs, gallery, FAQ and
    download table."""
    return '''
    <html>
    <head><title>Furniture Addon - MCPEDL</title></head>
    <body>
        <header>
            <h1 class="entry-title"> Furniture Addon </h1>
            <div class="categories"><a class="single-cat" href="/category/addons/">Addons</a></div>
            <time class="date" content="2024-05-01T10:00:00+00:00">May 1, 2024</time>
            <span class="meta-author-link"><span class="author">PostWriter</span></span>
            <span itemprop="ratingValue">4.5</span>
            <span itemprop="ratingCount">120</span>
            <span class="comment-count">15</span>
        </header>
        <div class="post-thumbnail"><img src="https://mcpedl.org/img/furniture-cover.png"></div>
        <section class="entry-content"><div>
            This addon adds over 100 pieces of furniture.
        </div></section>
        <div class="entry-gallery">
            <div class="slider">
                <div class="slides">
                    <div class="slide" itemscope itemtype="https://schema.org/ImageObject">
                        <img src="https://mcpedl.org/img/shot-1.png">
                    </div>
                    <div class="slide" itemscope itemtype="https://schema.org/VideoObject">
                        <meta itemprop="name" content="Furniture Trailer">
                        <meta itemprop="uploadDate" content="2024-04-28">
                        <img src="https://img.youtube.com/vi/abc123/0.jpg">
                        <a itemprop="embedUrl" href="#" onclick="openVideo({src: 'https://www.youtube.com/embed/abc123'})">Play</a>
                    </div>
                </div>
            </div>
        </div>
        <div id="faqs">
            <div>
                <details>
                    <summary><h3>How do I install it?</h3></summary>
                    <div><p>Open the .mcaddon file.</p></div>
                </details>
                <details>
                    <summary><h3>Does it work on Realms?</h3></summary>
                    <div><p>Yes.</p></div>
                </details>
            </div>
        </div>
        <footer>
            <div class="entry-footer-column">
                <div class="entry-footer-content"><div>Supported Minecraft versions:</div><span>1.20</span><span>1.21</span></div>
            </div>
            <div class="entry-footer-column">
                <div class="entry-footer-content"><!-- size -->File size: <span>2 MB</span></div>
            </div>
            <div class="entry-footer-column">
                <div class="entry-footer-content"><div>Author:</div><span>GameStudio</span></div>
            </div>
            <div class="entry-footer-column">
                <div class="entry-footer-content"><div>Publication date:</div><span>May 1, 2024</span></div>
            </div>
            <div class="entry-footer-column">
                <div class="entry-footer-content"><div>Downloads:</div></div>
            </div>
        </footer>
    ''' + sample_download_table_html + '''
    </body>
    </html>
    '''


@pytest.fixture
def sample_download_page_html():
    return '''
    <html>
    <body>
        <p>Your download will start shortly.</p>
        <a href="https://files.mcpedl.org/uploads/furniture.mcaddon">Click here</a>
    </body>
    </html>
    '''
