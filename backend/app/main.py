from flask import Blueprint, jsonify
from app.models import BankGame

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Bank scorekeeper!'})

@main.route('/health')
def health():
    return jsonify({
        'status': 'ok',
        'active_games': BankGame.query.filter_by(status='active').count(),
    })
