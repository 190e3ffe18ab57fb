"""Default multilingual training corpus.

Mixes several scripts, emoji, code, math notation and repeated English
patterns so a small training run exercises both ASCII merges and
multi-byte UTF-8 sequences.
"""

from typing import Final

DEFAULT_TRAINING_DATA: Final[str] = """\
In 2026, José said: "Hello, 世界! 👋🚀" while debugging const π = 3.14159; at 03:45 AM.
His café bill was €12.50 (₹1045.75), uptime = 99.99%, latency ≤ 10 ms.
Meanwhile العربية تُكتب من اليمين ← اليسار, हिंदी भी यहाँ है, and emojis like 🤖✨🔥 coexist with math ∑x², arrows → ⇄, and URLs such as https://example.com?q=テスト#α.
Final check: naïve façade coöperate — does it tokenize correctly? ✅

The quick brown fox jumps over the lazy dog. This sentence contains every letter of the alphabet.
Programming languages like Python, JavaScript, TypeScript, and Rust are widely used today.
Machine learning models require tokenization to process natural language text effectively.

Tokenization is the process of breaking down text into smaller units called tokens.
These tokens can be words, subwords, or even individual characters depending on the approach.
Byte Pair Encoding (BPE) is one of the most popular subword tokenization algorithms.
It works by iteratively merging the most frequent pairs of characters or character sequences.

The transformer architecture, introduced in the paper "Attention Is All You Need", revolutionized NLP.
Large language models like GPT-4, Claude, and LLaMA use subword tokenization for efficiency.
The vocabulary size is typically between 30,000 and 100,000 tokens for modern LLMs.

Common words like "the", "and", "is", "to", "of", "a", "in", "that", "it", "for" appear frequently.
Less common words get split into subwords: "tokenization" might become "token" + "ization".
This approach handles out-of-vocabulary words gracefully without needing a special unknown token.

Special characters and punctuation: !@#$%^&*()_+-=[]{}|;':",.<>?/`~
Numbers and dates: 1234567890, January 11th 2026, 3.14159265359, -273.15°C
Code snippets: function hello() { return "world"; } const x = (a, b) => a + b;

Different languages contribute to vocabulary diversity:
French: Bonjour, comment allez-vous? Je m'appelle Claude.
German: Guten Tag, wie geht es Ihnen? Maschinelles Lernen ist faszinierend.
Spanish: Hola, ¿cómo estás? El procesamiento del lenguaje natural es interesante.
Japanese: こんにちは、お元気ですか？自然言語処理は面白いです。
Chinese: 你好，你好吗？自然语言处理非常有趣。
Korean: 안녕하세요, 어떻게 지내세요? 자연어 처리는 흥미롭습니다.

Technical terms frequently used in AI and ML:
neural network, deep learning, gradient descent, backpropagation, attention mechanism
transformer, encoder, decoder, embedding, positional encoding, layer normalization
training, inference, fine-tuning, pre-training, loss function, optimizer, learning rate
batch size, epoch, overfitting, underfitting, regularization, dropout, activation function

Programming concepts and keywords:
function, class, interface, type, const, let, var, return, if, else, for, while, do
import, export, async, await, promise, callback, closure, prototype, inheritance
array, object, string, number, boolean, null, undefined, symbol, bigint, map, set

Common English words for better tokenization:
the, be, to, of, and, a, in, that, have, I, it, for, not, on, with, he, as, you, do, at
this, but, his, by, from, they, we, say, her, she, or, an, will, my, one, all, would, there
their, what, so, up, out, if, about, who, get, which, go, me, when, make, can, like, time
no, just, him, know, take, people, into, year, your, good, some, could, them, see, other

Repeated patterns help BPE learn common sequences:
the the the and and and is is is to to to of of of
ing ing ing tion tion tion ed ed ed ly ly ly er er er
un un un re re re pre pre pre dis dis dis

Mathematical and scientific notation:
E = mc², F = ma, PV = nRT, ∫f(x)dx, ∂y/∂x, ∇·E = ρ/ε₀
sin(θ), cos(θ), tan(θ), log(x), ln(x), exp(x), √x, x², x³, xⁿ
∑(n=1 to ∞), ∏(i=1 to n), lim(x→0), ∞, ≤, ≥, ≠, ≈, ∝, ∈, ∉, ⊂, ⊃, ∪, ∩

URLs, emails, and paths:
https://www.example.com/path/to/resource?query=value&other=123#section
user@example.com, admin@company.org, test.user@subdomain.example.co.uk
/home/user/documents/file.txt, C:\\Users\\Name\\Documents\\file.docx
./relative/path, ../parent/path, ~/home/path

JSON and data formats:
{"name": "tokenizer", "version": "1.0.0", "tokens": [1, 2, 3, 4, 5]}
<html><head><title>Page</title></head><body><p>Content</p></body></html>
key: value, list: [item1, item2, item3], nested: {inner: data}

Edge cases and special handling:
Words with apostrophes: don't, won't, can't, it's, I'm, you're, they're, we've, I've
Hyphenated words: state-of-the-art, well-known, self-driving, machine-learning
Contractions and abbreviations: Dr., Mr., Mrs., Ms., Jr., Sr., etc., e.g., i.e., vs.
Acronyms: NASA, FBI, CIA, HTML, CSS, JSON, API, REST, GPU, CPU, RAM, SSD

Numbers in various formats:
1, 10, 100, 1000, 10000, 100000, 1000000
1.5, 2.75, 3.14159, 0.001, 99.99
1st, 2nd, 3rd, 4th, 5th, 10th, 21st, 22nd, 23rd
50%, 100%, 0.5%, 99.9%
$10, $100.00, €50, £75, ¥1000, ₹500

This diverse corpus helps train a robust tokenizer that can handle:
- Multiple languages and scripts
- Technical terminology
- Programming code
- Mathematical notation
- Special characters and symbols
- Numbers and dates
- URLs and file paths
- Common patterns and rare words"""
