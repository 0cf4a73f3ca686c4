"""
プロンプト生成ロジック（写真からの問題生成）

【初心者向け】
- 教材がオランダ語なので、指示文もオランダ語で書く
- 出力は JSON のみ（title + questions）を要求する
"""


def _difficulty_mix(count: int) -> tuple[int, int, int]:
    """難易度の配分（easy 4 : medium 4 : hard 2 の比率、合計は count）"""
    hard = max(0, round(count * 0.2))
    easy = round((count - hard) / 2)
    medium = count - hard - easy
    return easy, medium, hard


def build_image_quiz_prompt(count: int = 10) -> str:
    """
    写真から問題を作らせるプロンプトを構築

    - 写真で読める内容のみを使う（推測禁止）
    - ちょうど count 問
    - JSON のみを返す（説明・マークダウン禁止）

    Args:
        count: 生成する問題数

    Returns:
        プロンプト文字列
    """
    easy, medium, hard = _difficulty_mix(count)
    min_multiple_choice = min(3, count)

    return f"""
Gebruik ENKEL wat je op de foto kan lezen. Niets verzinnen.
Maak exact {count} oefenvragen.

GEEF ALLEEN GELDIGE JSON TERUG (geen uitleg, geen markdown).
Schema:
{{
  "title": "korte titel",
  "questions": [
    {{
      "type": "short_answer|true_false|multiple_choice",
      "difficulty": "easy|medium|hard",
      "question": "...",
      "choices": ["A","B","C","D"],  // alleen bij multiple_choice
      "answer": "...",
      "explanation": "...",
      "evidence": "korte snippet uit de tekst op de foto"
    }}
  ]
}}

Regels:
- Mix: {easy} easy, {medium} medium, {hard} hard
- Minstens {min_multiple_choice} multiple_choice
- Bij multiple_choice is "answer" letterlijk een van de "choices"
- Bij true_false is "answer" "waar" of "onwaar"
- evidence moet echt uit de foto komen
""".strip()
