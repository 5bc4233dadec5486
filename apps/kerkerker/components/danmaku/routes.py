"""
Danmaku Routes
JSON proxy for the provider and the server-rendered selector dropdown
"""
import logging

from flask import Blueprint, current_app, jsonify, render_template, request

from .models import Anime
from .selector import DanmakuSelector
from .service import DanmakuError, DanmakuService, extract_search_keyword

logger = logging.getLogger(__name__)

danmaku_bp = Blueprint(
    'danmaku',
    __name__,
    template_folder='templates',
)


def _service():
    return current_app.extensions['danmaku']


@danmaku_bp.route('/api/danmaku/keyword')
def api_keyword():
    """Derive a search keyword from a video title"""
    title = request.args.get('title', '')
    return jsonify({'success': True, 'data': {'keyword': extract_search_keyword(title)}})


@danmaku_bp.route('/api/danmaku/search')
def api_search():
    """Search anime on the provider"""
    keyword = request.args.get('keyword', '')
    if not keyword.strip():
        return jsonify({'success': False, 'error': 'keyword is required'}), 400

    try:
        animes = _service().search_anime(keyword)
        return jsonify({'success': True, 'data': [anime.to_dict() for anime in animes]})
    except DanmakuError as e:
        logger.error(f'Danmaku search failed: {e}')
        return jsonify({'success': False, 'error': str(e)}), 502


@danmaku_bp.route('/api/danmaku/bangumi/<int:anime_id>')
def api_bangumi(anime_id):
    """Get episodes of an anime"""
    try:
        bangumi = _service().get_bangumi(anime_id)
    except DanmakuError as e:
        logger.error(f'Danmaku bangumi {anime_id} failed: {e}')
        return jsonify({'success': False, 'error': str(e)}), 502

    if bangumi is None:
        return jsonify({'success': False, 'error': 'bangumi not found'}), 404
    return jsonify({'success': True, 'data': bangumi.to_dict()})


@danmaku_bp.route('/api/danmaku/comments/<int:episode_id>')
def api_comments(episode_id):
    """Get every comment of an episode"""
    with_related = request.args.get('withRelated', 'true').lower() != 'false'
    try:
        items = _service().get_comments(episode_id, with_related=with_related)
    except DanmakuError as e:
        logger.error(f'Danmaku comments {episode_id} failed: {e}')
        return jsonify({'success': False, 'error': str(e)}), 502

    return jsonify({
        'success': True,
        'data': {
            'count': len(items),
            'comments': [item.to_dict() for item in items],
        },
    })


@danmaku_bp.route('/components/danmaku_selector')
def render_selector():
    """Render the selector dropdown

    The flow is replayed from the query string: ``keyword`` (or ``search``)
    runs a search, ``anime_id`` selects an anime, ``episode_id`` an episode
    and ``load`` fetches its comments.
    """
    title = request.args.get('title', '')
    danmaku_count = request.args.get('danmaku_count', 0, type=int)
    anime_id = request.args.get('anime_id', type=int)
    episode_id = request.args.get('episode_id', type=int)

    selector = DanmakuSelector(_service())
    if 'keyword' in request.args:
        selector.search_keyword = request.args['keyword']
    selector.open(title)

    if 'keyword' in request.args or 'search' in request.args or anime_id is not None:
        selector.search()

    if anime_id is not None and not selector.error:
        anime = selector.find_anime(anime_id) or Anime(anime_id=anime_id, anime_title='')
        selector.select_anime(anime)

    if episode_id is not None and selector.episodes:
        try:
            selector.select_episode(episode_id)
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400

    loaded = []
    if request.args.get('load'):
        selector.load_danmaku(loaded.extend)

    return render_template(
        'danmaku_selector.html',
        selector=selector,
        title=title,
        danmaku_count=len(loaded) if selector.loaded_count is not None else danmaku_count,
        loaded=[item.to_dict() for item in loaded],
    )


def init_danmaku(app):
    """Initialize danmaku component with Flask app"""
    app.extensions['danmaku'] = DanmakuService(
        base_url=app.config['DANMAKU_API_URL'],
        timeout=app.config['DANMAKU_TIMEOUT'],
    )
    app.register_blueprint(danmaku_bp)
    return danmaku_bp
