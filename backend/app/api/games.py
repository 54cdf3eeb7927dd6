from flask import Blueprint, jsonify, request, current_app
from app import socketio
from app.services import store
from app.services.bank import (
    BankGameError,
    GameEndedError,
    AlreadyBankedError,
    InvalidSetupError,
    PlayerNotFoundError,
    RoundEndedError,
    RoundNotEndedError,
    Settings,
    advance_round,
    apply_bank,
    apply_roll,
    initialize_game,
)
from app.services.bank.dice import dice_from_sum
from app.services.bank.errors import InvalidDiceError
from app.services.bank.roster import build_roster


games = Blueprint('games', __name__)

_CONFLICT_ERRORS = (RoundNotEndedError, RoundEndedError, GameEndedError, AlreadyBankedError)


def _emit_update(game_code: str) -> None:
    socketio.emit('state_update', {'game_code': game_code}, to=f"game:{game_code}", namespace='/ws')


def _rejected(game_code: str, action: str, exc: Exception):
    current_app.logger.info(f"[rejected] game={game_code} action={action} error={exc.__class__.__name__}: {exc}")
    if isinstance(exc, PlayerNotFoundError):
        status = 404
    elif isinstance(exc, _CONFLICT_ERRORS):
        status = 409
    else:
        status = 400
    return jsonify({'error': str(exc)}), status


def _conflict(game_code: str, action: str, exc: Exception):
    current_app.logger.warning(f"[conflict] game={game_code} action={action}")
    return jsonify({'error': str(exc)}), 409


def _table_or_404(game_code, for_update=False):
    record = store.find_table(game_code, for_update=for_update)
    if not record:
        return None, (jsonify({'error': 'Game not found'}), 404)
    return record, None


def _json_object():
    """Request body as a dict, or None when it is not a JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def _as_int(value):
    """Whole numbers become ints; anything else is returned untouched for the core to reject."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _as_flag(value, default, error_cls, name):
    if value is None:
        return default
    if not isinstance(value, bool):
        raise error_cls(f'{name} must be true or false')
    return value


@games.route('/create', methods=['POST'])
def create_game():
    data = _json_object()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    cfg = current_app.config
    total_rounds = _as_int(data.get('total_rounds', cfg.get('DEFAULT_TOTAL_ROUNDS', 10)))
    try:
        rule = _as_flag(
            data.get('first_three_rolls_seven_rule'),
            bool(cfg.get('FIRST_THREE_ROLLS_SEVEN_RULE', True)),
            InvalidSetupError,
            'first_three_rolls_seven_rule',
        )
        roster = build_roster(
            data.get('names'),
            total_rounds,
            allowed_rounds=cfg.get('ALLOWED_ROUND_COUNTS', (10, 15, 20)),
            min_players=int(cfg.get('MIN_PLAYERS', 2)),
            max_players=int(cfg.get('MAX_PLAYERS', 50)),
        )
        game = initialize_game(roster, total_rounds, Settings(first_three_rolls_seven_rule=rule))
    except BankGameError as exc:
        return _rejected('-', 'create', exc)

    record = store.create_table(game)
    current_app.logger.info(
        f"[create] game={record.game_code} players={len(game.players)} rounds={game.total_rounds} "
        f"starter={game.current_player.id} seven_rule={game.settings.first_three_rolls_seven_rule}"
    )
    return jsonify(store.state_payload(record, game)), 201


@games.route('/roster', methods=['GET'])
def get_saved_roster():
    return jsonify({'names': store.saved_roster()})


@games.route('/<string:game_code>/state', methods=['GET'])
def get_game_state(game_code):
    record, missing = _table_or_404(game_code)
    if missing:
        return missing
    return jsonify(store.state_payload(record, store.load_game(record)))


@games.route('/<string:game_code>/roll', methods=['POST'])
def roll_dice(game_code):
    record, missing = _table_or_404(game_code, for_update=True)
    if missing:
        return missing
    data = _json_object()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    game = store.load_game(record)
    try:
        if 'die1' in data or 'die2' in data:
            die1, die2 = _as_int(data.get('die1')), _as_int(data.get('die2'))
        elif 'sum' in data:
            die1, die2 = dice_from_sum(
                _as_int(data.get('sum')),
                _as_flag(data.get('doubles'), False, InvalidDiceError, 'doubles'),
            )
        else:
            raise InvalidDiceError('Provide die1 and die2, or sum and doubles')
        updated = apply_roll(game, die1, die2)
    except BankGameError as exc:
        return _rejected(record.game_code, 'roll', exc)

    try:
        store.commit_transition(record, updated)
    except store.ConcurrentUpdateError as exc:
        return _conflict(record.game_code, 'roll', exc)
    current_app.logger.info(
        f"[roll] game={record.game_code} round={updated.current_round} roll={updated.roll_count_in_round} "
        f"dice={die1}+{die2} pot={game.bank_total}->{updated.bank_total} ended={updated.round_ended}"
    )
    _emit_update(record.game_code)
    return jsonify(store.state_payload(record, updated))


@games.route('/<string:game_code>/bank', methods=['POST'])
def bank(game_code):
    record, missing = _table_or_404(game_code, for_update=True)
    if missing:
        return missing
    data = _json_object()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    player_id = data.get('player_id')
    if not player_id:
        return jsonify({'error': 'player_id is required'}), 400
    game = store.load_game(record)
    try:
        updated = apply_bank(game, str(player_id))
    except BankGameError as exc:
        return _rejected(record.game_code, 'bank', exc)

    try:
        store.commit_transition(record, updated)
    except store.ConcurrentUpdateError as exc:
        return _conflict(record.game_code, 'bank', exc)
    current_app.logger.info(
        f"[bank] game={record.game_code} round={updated.current_round} player={player_id} "
        f"amount={updated.bank_total} ended={updated.round_ended}"
    )
    _emit_update(record.game_code)
    return jsonify(store.state_payload(record, updated))


@games.route('/<string:game_code>/advance', methods=['POST'])
def advance(game_code):
    record, missing = _table_or_404(game_code, for_update=True)
    if missing:
        return missing
    game = store.load_game(record)
    try:
        updated = advance_round(game)
    except BankGameError as exc:
        return _rejected(record.game_code, 'advance', exc)

    try:
        store.commit_transition(record, updated)
    except store.ConcurrentUpdateError as exc:
        return _conflict(record.game_code, 'advance', exc)
    if updated.status == 'ended':
        current_app.logger.info(f"[finish] game={record.game_code} finished at round={updated.current_round}")
    else:
        current_app.logger.info(
            f"[advance] game={record.game_code} round {game.current_round} -> {updated.current_round} "
            f"reason={game.round_end_reason} starter={updated.current_player.id}"
        )
    _emit_update(record.game_code)
    return jsonify(store.state_payload(record, updated))


@games.route('/<string:game_code>/undo', methods=['POST'])
def undo(game_code):
    record, missing = _table_or_404(game_code, for_update=True)
    if missing:
        return missing
    try:
        restored = store.undo(record)
    except store.UndoUnavailableError as exc:
        return jsonify({'error': str(exc)}), 400
    current_app.logger.info(
        f"[undo] game={record.game_code} round={restored.current_round} roll={restored.roll_count_in_round}"
    )
    _emit_update(record.game_code)
    return jsonify(store.state_payload(record, restored))


@games.route('/<string:game_code>', methods=['DELETE'])
def reset_game(game_code):
    record, missing = _table_or_404(game_code, for_update=True)
    if missing:
        return missing
    code = record.game_code
    store.discard_table(record)
    current_app.logger.info(f"[reset] game={code} discarded")
    socketio.emit('session_ended', {'game_code': code}, to=f"game:{code}", namespace='/ws')
    return jsonify({'message': 'Game discarded'})
