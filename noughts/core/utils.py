def render_board(board) -> str:
    """ASCII picture of the board, one text row per board row."""
    size = board.get_size()
    rows = []
    for row in range(size):
        cells = board.cells[row * size:(row + 1) * size]
        rows.append(" " + " | ".join(cell.value for cell in cells) + " ")
    separator = "\n" + "+".join(["---"] * size) + "\n"
    return separator.join(rows)


def describe_score(score, SCORE_WIN, SCORE_LOSE) -> str:
    # depth bias: wins score SCORE_WIN - plies, losses SCORE_LOSE + plies
    if score > 0:
        return f"win in {SCORE_WIN - score}"
    if score < 0:
        return f"loss in {score - SCORE_LOSE}"
    return "draw"


def format_info(best_move, score, nodes, elapsed, SCORE_WIN, SCORE_LOSE) -> str:
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    outcome = describe_score(score, SCORE_WIN, SCORE_LOSE)
    return (
        f"info bestmove {best_move} score {score} ({outcome}) "
        f"nodes {nodes} nps {nps} time {int(elapsed * 1000)}ms"
    )
